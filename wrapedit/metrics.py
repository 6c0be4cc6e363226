"""Glyph metrics used by the reflow engine.

The core never measures text itself. A ``MetricsProvider`` answers two
questions for a given font: how wide is this text, and how tall is a line.
Answers must be deterministic for a font/content pair within one reflow.
"""

import math
from abc import ABC, abstractmethod
from typing import Optional

import blessed

from .font_config import FontSpec


class MetricsProvider(ABC):
    """Interface to whatever knows how big glyphs are."""

    @abstractmethod
    def measure_width(self, text: str, font: FontSpec) -> float:
        """Return the on-screen width of ``text`` in device units."""

    @abstractmethod
    def line_height(self, font: FontSpec) -> float:
        """Return the height of one line in device units."""


class MonospaceMetrics(MetricsProvider):
    """Fixed advance per character, proportional to the font size.

    Widths are rounded up to whole units like a pixel renderer would.
    Line height never drops below one unit so coordinate lookups stay
    defined even at font size 0.
    """

    def __init__(self, width_ratio: float = 0.6, height_ratio: float = 1.25):
        self.width_ratio = width_ratio
        self.height_ratio = height_ratio

    def measure_width(self, text: str, font: FontSpec) -> float:
        if text == "\n":
            return 0.0
        return float(math.ceil(font.size * self.width_ratio) * len(text))

    def line_height(self, font: FontSpec) -> float:
        return float(max(1, math.ceil(font.size * self.height_ratio)))


class TerminalMetrics(MetricsProvider):
    """Terminal cells: one row per line, columns as reported by blessed.

    The font size has no effect on a terminal grid.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        self.term = terminal or blessed.Terminal()

    def measure_width(self, text: str, font: FontSpec) -> float:
        del font  # Unused
        if text == "\n":
            return 0.0
        # Control characters report a negative width
        return float(max(0, self.term.length(text)))

    def line_height(self, font: FontSpec) -> float:
        del font  # Unused
        return 1.0
