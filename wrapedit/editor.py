"""Main editor controller for the terminal front end."""

import logging
import os
import select
import signal
import sys
import termios
from dataclasses import replace
from typing import Optional

from .commands import ChangeFontSize, CommandRegistry, Resize, Save
from .constants import EditorConstants
from .font_config import FontSpec, get_font_spec
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .metrics import TerminalMetrics
from .model import TextModel
from .persistence import LoadStatus, load_document
from .settings_persistence import FONT_SIZE, SettingsPersistence, get_persistence
from .terminal import TerminalInterface
from .view import TerminalTextView

logger = logging.getLogger(__name__)


class Editor:
    """Terminal application controller around a ``TextModel``."""

    def __init__(self, terminal=None, settings: Optional[SettingsPersistence] = None):
        """Initialize the editor components.

        Args:
            terminal: blessed.Terminal to draw on; a new one by default
            settings: Per-document settings store; the shared one by default
        """
        self.terminal = TerminalInterface(terminal)
        self.keyboard = KeyboardHandler(self.terminal)
        self.settings = settings or get_persistence()
        rows, columns = self._text_area()
        self.view = TerminalTextView(num_rows=rows, num_columns=columns)
        self.model = TextModel(
            self.view,
            metrics=TerminalMetrics(self.terminal.term),
            font=get_font_spec("Courier") or FontSpec.default(),
            window_width=columns,
            window_height=rows,
            start_x=EditorConstants.TERMINAL_ORIGIN_X,
            start_y=0.0,
            margin=EditorConstants.TERMINAL_MARGIN,
        )
        self.command_registry = CommandRegistry()
        self.running = False
        self.filename: Optional[str] = None
        self.status_message: Optional[str] = None
        self.prompt_mode: Optional[str] = None  # None, 'save_filename', 'save_filename_quit' or 'quit_confirm'
        self.prompt_input = ""
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None

    def _text_area(self):
        """Rows and columns available for text; the last row is the status line."""
        return max(1, self.terminal.height - 1), max(1, self.terminal.width)

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        if self._resize_pipe_w is not None:
            os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def run(self):
        """Run the main editor loop."""
        self.terminal.setup()
        self.running = True
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        try:
            with self.terminal.term.cbreak():
                old_settings = self._disable_flow_control()
                try:
                    self.apply_resize()
                    self._draw()
                    while self.running:
                        # Use file descriptor 0 for stdin to work in all environments
                        ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                        if self._resize_pipe_r in ready:
                            os.read(self._resize_pipe_r, 1024)
                            self.apply_resize()
                        elif 0 in ready:
                            key_event = self.keyboard.get_key_event(timeout=0)
                            if key_event:
                                self._handle_key_event(key_event)
                        self._draw()
                finally:
                    if old_settings is not None:
                        termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self._resize_pipe_r = self._resize_pipe_w = None
            self.terminal.cleanup()

    def _disable_flow_control(self):
        """Let Ctrl-S and Ctrl-Q reach the editor instead of the tty.

        Returns:
            The previous tty attributes, or None if stdin is not a tty
        """
        try:
            old_settings = termios.tcgetattr(sys.stdin)
        except (termios.error, OSError):
            return None
        new_settings = list(old_settings)
        new_settings[0] &= ~(termios.IXON | termios.IXOFF)
        termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
        return old_settings

    def apply_resize(self):
        """Reflow the document for the current terminal size."""
        rows, columns = self._text_area()
        self.view.num_rows = rows
        self.view.num_columns = columns
        Resize(columns, rows).execute(self.model)

    def _draw(self):
        """Draw the current state of the editor."""
        self.terminal.draw_lines(
            self.view.lines,
            self.view.cursor_row(),
            self.view.visual_cursor_x,
            status_override=self._status_line(),
        )

    def _status_line(self) -> Optional[str]:
        if self.prompt_mode in ('save_filename', 'save_filename_quit'):
            return f"Save as: {self.prompt_input}"
        if self.prompt_mode == 'quit_confirm':
            return "Save changes before quitting? (y/n, any other key cancels)"
        return self.status_message

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        # Clear status message on any keypress (except in prompt mode)
        if self.status_message and not self.prompt_mode:
            self.status_message = None

        if self._handle_prompt_mode(key_event):
            return

        if key_event.key_type == KeyType.CTRL and key_event.value == 's':
            self._handle_save()
            return
        if key_event.key_type == KeyType.CTRL and key_event.value == 'q':
            self._handle_quit()
            return

        command = self.command_registry.get_command(key_event)
        if command is None:
            return
        command.execute(self.model)
        if isinstance(command, ChangeFontSize):
            self._remember_font_size()

    def _handle_prompt_mode(self, key_event: KeyEvent) -> bool:
        """Handle input in prompt mode.

        Returns:
            True if in prompt mode and event was handled
        """
        if self.prompt_mode in ('save_filename', 'save_filename_quit'):
            self._handle_filename_prompt(key_event)
            return True
        if self.prompt_mode == 'quit_confirm':
            self._handle_quit_confirm(key_event)
            return True
        return False

    def load_file(self, filename: str):
        """Load a file into the editor.

        A missing file starts an empty document under that name. The font
        size last used for the document is restored.

        Args:
            filename: Path to file to load
        """
        self.filename = filename
        result = load_document(filename)
        if result.status is LoadStatus.ERROR:
            self.status_message = result.message
            return
        font_size = self.settings.load_settings(filename).get(FONT_SIZE)
        if font_size is not None:
            self.model.font = replace(self.model.font, size=font_size)
        self.model.load_text(result.text)

    def save_file(self, filename: str) -> bool:
        """Save the document and report the outcome in the status line.

        Returns:
            True if save succeeded, False otherwise
        """
        result = Save(filename).execute(self.model).save_result
        self.status_message = result.message
        if result.ok:
            self.filename = filename
            self._remember_font_size()
        return result.ok

    def _remember_font_size(self):
        if self.filename:
            self.settings.save_settings(self.filename, {FONT_SIZE: self.model.font.size})

    def _handle_save(self):
        """Handle Ctrl-S save command."""
        if self.filename:
            self.save_file(self.filename)
        else:
            self.prompt_mode = 'save_filename'
            self.prompt_input = ""

    def _handle_quit(self):
        """Handle Ctrl-Q; asks first when there are unsaved changes."""
        if self.model.modified:
            self.prompt_mode = 'quit_confirm'
        else:
            self.running = False

    def _handle_filename_prompt(self, key_event: KeyEvent):
        """Handle keypress during filename prompt."""
        if (key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape') or \
           (key_event.key_type == KeyType.CTRL and key_event.value == 'g'):  # ESC or Ctrl-G
            self.prompt_mode = None
            self.prompt_input = ""
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            if self.prompt_input:
                quitting = self.prompt_mode == 'save_filename_quit'
                self.prompt_mode = None
                if self.save_file(self.prompt_input) and quitting:
                    self.running = False
                self.prompt_input = ""
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'backspace':
            self.prompt_input = self.prompt_input[:-1]
        elif key_event.key_type == KeyType.REGULAR:
            char = key_event.value
            if len(char) == 1 and ord(char) >= 32 and char != '\x7f':
                self.prompt_input += char

    def _handle_quit_confirm(self, key_event: KeyEvent):
        """Handle keypress during quit confirmation."""
        self.prompt_mode = None
        if key_event.key_type != KeyType.REGULAR:
            return
        char = key_event.value.lower()
        if char == 'y':
            if self.filename:
                if self.save_file(self.filename):
                    self.running = False
            else:
                # Need filename first
                self.prompt_mode = 'save_filename_quit'
                self.prompt_input = ""
        elif char == 'n':
            self.running = False
