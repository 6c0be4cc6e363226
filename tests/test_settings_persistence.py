"""Unit tests for settings persistence."""

import json
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from wrapedit import settings_persistence
from wrapedit.settings_persistence import SettingsPersistence, get_persistence


class TestSettingsPersistence(unittest.TestCase):
    """Test settings persistence functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.persistence = SettingsPersistence(config_dir=self.temp_dir)
        self.test_doc_path = os.path.join(self.temp_dir, "test_document.txt")

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_save_and_load_font_size(self):
        """Test saving and loading the font size for a document."""
        self.assertTrue(self.persistence.save_settings(self.test_doc_path, {"font_size": 20}))
        self.assertEqual(self.persistence.load_settings(self.test_doc_path), {"font_size": 20})

    def test_settings_survive_a_new_instance(self):
        """Test that settings are read back from disk."""
        self.persistence.save_settings(self.test_doc_path, {"font_size": 8})
        fresh = SettingsPersistence(config_dir=self.temp_dir)
        self.assertEqual(fresh.load_settings(self.test_doc_path), {"font_size": 8})

    def test_relative_and_absolute_paths_match(self):
        """Test that relative paths are stored as absolute paths."""
        cwd = os.getcwd()
        try:
            os.chdir(self.temp_dir)
            self.persistence.save_settings("test_document.txt", {"font_size": 16})
            absolute = os.path.join(os.getcwd(), "test_document.txt")
        finally:
            os.chdir(cwd)
        self.assertEqual(self.persistence.load_settings(absolute), {"font_size": 16})

    def test_update_merges_settings(self):
        """Test that saving merges with existing settings."""
        self.persistence.save_settings(self.test_doc_path, {"font_size": 12, "other": "kept"})
        self.persistence.save_settings(self.test_doc_path, {"font_size": 16})
        self.assertEqual(
            self.persistence.load_settings(self.test_doc_path),
            {"font_size": 16, "other": "kept"},
        )

    def test_load_nonexistent_document(self):
        """Test loading settings for a document with no saved settings."""
        self.assertEqual(self.persistence.load_settings("/nonexistent/document.txt"), {})

    def test_none_document_path(self):
        """Test that a None document path is ignored."""
        self.assertFalse(self.persistence.save_settings(None, {"font_size": 12}))
        self.assertEqual(self.persistence.load_settings(None), {})

    def test_invalid_font_size_is_dropped(self):
        """Test that invalid font sizes are not loaded."""
        for bad in (-1, "big", True, 12.5, 10000):
            self.persistence.save_settings(self.test_doc_path, {"font_size": bad})
            self.assertEqual(self.persistence.load_settings(self.test_doc_path), {})

    def test_validate_setting(self):
        """Test setting validation."""
        self.assertTrue(self.persistence.validate_setting("font_size", 0))
        self.assertFalse(self.persistence.validate_setting("font_size", -4))
        self.assertTrue(self.persistence.validate_setting("unknown", object()))

    def test_corrupted_settings_file(self):
        """Test recovery from a corrupted settings file."""
        with open(os.path.join(self.temp_dir, "settings.json"), "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertLogs("wrapedit.settings_persistence", level="WARNING"):
            self.assertEqual(self.persistence.load_settings(self.test_doc_path), {})

    def test_settings_file_with_wrong_shape(self):
        """Test recovery from a settings file that is not a dict."""
        with open(os.path.join(self.temp_dir, "settings.json"), "w", encoding="utf-8") as f:
            json.dump(["a", "list"], f)
        self.assertEqual(self.persistence.load_settings(self.test_doc_path), {})

    def test_settings_file_is_json(self):
        """Test the on-disk settings format."""
        self.persistence.save_settings(self.test_doc_path, {"font_size": 12})
        with open(os.path.join(self.temp_dir, "settings.json"), encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data, {os.path.abspath(self.test_doc_path): {"font_size": 12}})
        self.assertFalse(os.path.exists(os.path.join(self.temp_dir, "settings.tmp")))

    def test_clear_cache_rereads_disk(self):
        """Test that clearing the cache rereads the file."""
        self.persistence.save_settings(self.test_doc_path, {"font_size": 12})
        with open(os.path.join(self.temp_dir, "settings.json"), "w", encoding="utf-8") as f:
            json.dump({}, f)
        self.assertEqual(self.persistence.load_settings(self.test_doc_path), {"font_size": 12})
        self.persistence.clear_cache()
        self.assertEqual(self.persistence.load_settings(self.test_doc_path), {})

    def test_config_dir_is_created(self):
        """Test that a missing config directory is created."""
        nested = os.path.join(self.temp_dir, "a", "b")
        persistence = SettingsPersistence(config_dir=nested)
        self.assertTrue(persistence.save_settings(self.test_doc_path, {"font_size": 12}))
        self.assertTrue(os.path.isfile(os.path.join(nested, "settings.json")))


def test_get_persistence_is_shared(tmp_path):
    """Test that the shared instance is created once."""
    with patch.object(settings_persistence, "_persistence", None), \
         patch("platformdirs.user_config_dir", return_value=str(tmp_path)):
        first = get_persistence()
        assert get_persistence() is first
        assert first._settings_file == tmp_path / "settings.json"
