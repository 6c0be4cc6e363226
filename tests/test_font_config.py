"""Tests for font configuration and glyph metrics."""

from unittest.mock import Mock

from wrapedit.font_config import FontSpec, get_font_spec
from wrapedit.metrics import MonospaceMetrics, TerminalMetrics


def test_default_font():
    """Test the starting font."""
    font = FontSpec.default()
    assert font.name == "Verdana"
    assert font.size == 12


def test_resized_is_floored_at_zero():
    """Test that resizing never goes below size 0."""
    font = FontSpec("Courier", 8)
    assert font.resized(4).size == 12
    assert font.resized(-4).size == 4
    assert font.resized(-20).size == 0
    assert font.size == 8


def test_get_font_spec():
    """Test looking up font presets by name."""
    assert get_font_spec("Courier").monospace
    assert not get_font_spec("Verdana").monospace
    assert get_font_spec("Comic Sans") is None


def test_monospace_metrics():
    """Test rounded monospace widths and line height."""
    metrics = MonospaceMetrics(width_ratio=0.6, height_ratio=1.25)
    font = FontSpec("Courier", 12)
    assert metrics.measure_width("a", font) == 8.0
    assert metrics.measure_width("abc", font) == 24.0
    assert metrics.measure_width("\n", font) == 0.0
    assert metrics.line_height(font) == 15.0
    assert metrics.line_height(FontSpec("Courier", 0)) == 1.0


def test_terminal_metrics():
    """Test terminal cell metrics."""
    term = Mock()
    term.length = Mock(side_effect=lambda text: -1 if text == "\x07" else len(text))
    metrics = TerminalMetrics(term)
    font = FontSpec("Courier", 40)
    assert metrics.measure_width("a", font) == 1.0
    assert metrics.measure_width("\x07", font) == 0.0
    assert metrics.measure_width("\n", font) == 0.0
    assert metrics.line_height(font) == 1.0
