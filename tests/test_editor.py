"""Tests for the terminal editor controller, with a mocked terminal."""

from unittest.mock import MagicMock, Mock

import pytest

from wrapedit.editor import Editor
from wrapedit.keyboard import KeyEvent, KeyType
from wrapedit.settings_persistence import SettingsPersistence


def regular(char):
    return KeyEvent(key_type=KeyType.REGULAR, value=char, raw=char)


def ctrl(letter):
    return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=letter, is_ctrl=True)


def special(name):
    return KeyEvent(key_type=KeyType.SPECIAL, value=name, raw=name)


@pytest.fixture
def term():
    term = MagicMock()
    term.width = 40
    term.height = 10
    term.length = len
    return term


@pytest.fixture
def settings(tmp_path):
    return SettingsPersistence(config_dir=tmp_path / "config")


@pytest.fixture
def editor(term, settings):
    editor = Editor(terminal=term, settings=settings)
    editor.running = True
    return editor


def type_keys(editor, text):
    for char in text:
        editor._handle_key_event(regular(char))


def test_layout_follows_terminal(editor):
    """Test that the text area leaves the last row for the status line."""
    assert editor.view.num_rows == 9
    assert editor.view.num_columns == 40
    assert editor.model.max_width == 39


def test_typing_updates_view(editor):
    """Test that typed keys reach the model and the view."""
    type_keys(editor, "hi")
    editor._handle_key_event(special('enter'))
    type_keys(editor, "there")
    assert editor.model.text() == "hi\nthere"
    assert editor.view.lines[:2] == ["hi", "there"]
    assert editor.model.modified


def test_undo_key(editor):
    """Test Ctrl-Z and Ctrl-Y."""
    type_keys(editor, "ab")
    editor._handle_key_event(ctrl('z'))
    assert editor.model.text() == "a"
    editor._handle_key_event(ctrl('y'))
    assert editor.model.text() == "ab"


def test_save_prompts_for_filename(editor, tmp_path):
    """Test saving an unnamed document through the filename prompt."""
    type_keys(editor, "hello")
    editor._handle_key_event(ctrl('s'))
    assert editor.prompt_mode == 'save_filename'

    path = str(tmp_path / "doc.txt")
    type_keys(editor, path)
    assert editor.prompt_input == path
    editor._handle_key_event(special('enter'))

    assert editor.prompt_mode is None
    assert editor.filename == path
    assert editor.status_message == f"Successfully saved file to {path}"
    assert not editor.model.modified
    with open(path, encoding="utf-8") as f:
        assert f.read() == "hello"


def test_filename_prompt_can_be_cancelled(editor):
    """Test editing and cancelling the filename prompt."""
    editor._handle_key_event(ctrl('s'))
    type_keys(editor, "x")
    editor._handle_key_event(special('backspace'))
    assert editor.prompt_input == ""
    editor._handle_key_event(special('escape'))
    assert editor.prompt_mode is None
    assert editor.model.text() == ""


def test_saving_empty_document(editor, tmp_path):
    """Test that saving an empty document reports nothing to write."""
    editor.filename = str(tmp_path / "doc.txt")
    editor._handle_key_event(ctrl('s'))
    assert editor.status_message == "There is nothing to write."
    assert not (tmp_path / "doc.txt").exists()


def test_status_message_cleared_by_next_key(editor, tmp_path):
    """Test that any key clears the status message."""
    editor.filename = str(tmp_path / "doc.txt")
    editor._handle_key_event(ctrl('s'))
    editor._handle_key_event(special('left'))
    assert editor.status_message is None


def test_quit_without_changes(editor):
    """Test that Ctrl-Q quits at once when nothing changed."""
    editor._handle_key_event(ctrl('q'))
    assert not editor.running


def test_quit_with_changes_asks_first(editor):
    """Test that Ctrl-Q asks before discarding changes."""
    type_keys(editor, "a")
    editor._handle_key_event(ctrl('q'))
    assert editor.running
    assert editor.prompt_mode == 'quit_confirm'

    editor._handle_key_event(regular('n'))
    assert not editor.running


def test_quit_confirm_saves(editor, tmp_path):
    """Test that answering y saves and quits."""
    path = tmp_path / "doc.txt"
    editor.filename = str(path)
    type_keys(editor, "a")
    editor._handle_key_event(ctrl('q'))
    editor._handle_key_event(regular('y'))
    assert not editor.running
    assert path.read_text(encoding="utf-8") == "a"


def test_quit_confirm_other_key_cancels(editor):
    """Test that any other answer cancels quitting."""
    type_keys(editor, "a")
    editor._handle_key_event(ctrl('q'))
    editor._handle_key_event(regular('x'))
    assert editor.running
    assert editor.prompt_mode is None
    assert editor.model.text() == "a"


def test_load_file_restores_font_size(editor, settings, tmp_path):
    """Test that loading a document restores its font size."""
    path = tmp_path / "doc.txt"
    path.write_text("hello\nworld", encoding="utf-8")
    settings.save_settings(str(path), {"font_size": 20})

    editor.load_file(str(path))
    assert editor.model.text() == "hello\nworld"
    assert editor.model.font.size == 20
    assert not editor.model.modified
    assert editor.view.lines[:2] == ["hello", "world"]


def test_load_missing_file_starts_empty(editor, tmp_path):
    """Test that a missing file opens as an empty document."""
    path = str(tmp_path / "new.txt")
    editor.load_file(path)
    assert editor.filename == path
    assert editor.model.text() == ""
    assert editor.status_message is None


def test_load_error_is_reported(editor, tmp_path):
    """Test that a load failure shows in the status line."""
    editor.load_file(str(tmp_path))
    assert editor.status_message.startswith("Error when loading")
    assert editor.model.text() == ""


def test_font_size_change_is_remembered(editor, settings, tmp_path):
    """Test that a font size change is stored for the document."""
    path = str(tmp_path / "doc.txt")
    editor.filename = path
    editor._handle_key_event(KeyEvent(key_type=KeyType.ALT, value='=', raw='\x1b=', is_alt=True))
    assert editor.model.font.size == 16
    assert settings.load_settings(path) == {"font_size": 16}


def test_resize_reflows(editor, term):
    """Test that a terminal resize updates view and model."""
    term.width = 20
    term.height = 5
    editor.apply_resize()
    assert editor.view.num_columns == 20
    assert editor.view.num_rows == 4
    assert editor.model.window_width == 20
    assert editor.model.window_height == 4


def test_draw_passes_view_state(editor):
    """Test that drawing hands the rendered rows and cursor to the terminal."""
    editor.terminal.draw_lines = Mock()
    type_keys(editor, "ab")
    editor._draw()
    editor.terminal.draw_lines.assert_called_once_with(
        editor.view.lines, 0, 2, status_override=None
    )


def test_draw_shows_prompt(editor):
    """Test that the filename prompt replaces the status line."""
    editor.terminal.draw_lines = Mock()
    editor._handle_key_event(ctrl('s'))
    type_keys(editor, "f")
    editor._draw()
    assert editor.terminal.draw_lines.call_args.kwargs["status_override"] == "Save as: f"
