"""Greedy word wrap over the character store.

Every call lays out the whole document from scratch and returns a new
``LineIndex``. That is O(document length) per edit, which keeps the index
trivially consistent with the store.
"""

import logging
from typing import Optional

from .font_config import FontSpec
from .line_index import LineIndex
from .metrics import MetricsProvider
from .storage import BOUNDARY, CharacterStore

logger = logging.getLogger(__name__)


class ReflowEngine:
    """Assigns coordinates to cells and breaks lines at ``max_width``.

    Lines break after a hard newline, or when the next non-space cell
    would cross ``max_width``. In the second case the walk backtracks to
    just after the last space on the line (the space stays at the end of
    the old line, flagged ``soft_break``). Without such a space the word
    is broken at the current cell. Spaces never trigger a break; they hang
    past the margin. A space that opens a line is kept and is not a wrap
    point.
    """

    def __init__(self, metrics: MetricsProvider, start_x: float = 0.0, start_y: float = 0.0):
        self.metrics = metrics
        self.start_x = start_x
        self.start_y = start_y

    def reflow(self, store: CharacterStore, font: FontSpec, max_width: float) -> LineIndex:
        line_height = self.metrics.line_height(font)
        index = LineIndex(store.generation, line_height, self.start_x, self.start_y)

        x = self.start_x
        line = 0
        line_start = True
        line_has_content = False
        wrap_point: Optional[int] = None

        cell_id = store.first()
        while cell_id != BOUNDARY:
            cell = store.cell(cell_id)
            if line_start:
                index.record(line, cell_id)
                line_start = False
                line_has_content = False
                wrap_point = None

            if cell.is_newline:
                self._place(cell, x, line, line_height, 0.0)
                x = self.start_x
                line += 1
                line_start = True
                cell_id = cell.next
                continue

            width = self.metrics.measure_width(cell.content, font)
            if not cell.is_space and line_has_content and x + width > max_width:
                if wrap_point is not None:
                    store.cell(wrap_point).soft_break = True
                    cell_id = store.next_of(wrap_point)
                # else: single word wider than the line, break right here
                x = self.start_x
                line += 1
                line_start = True
                continue

            if cell.is_space and line_has_content:
                wrap_point = cell_id
            self._place(cell, x, line, line_height, width)
            x += width
            line_has_content = True
            cell_id = cell.next

        logger.debug("Reflowed %d cells into %d lines at width %s", len(store), len(index), max_width)
        return index

    def _place(self, cell, x: float, line: int, line_height: float, width: float) -> None:
        cell.x = x
        cell.line = line
        cell.y = self.start_y + line * line_height
        cell.width = width
        cell.soft_break = False
