"""Line number to first-cell lookup, rebuilt by every reflow."""

from typing import Optional

from .storage import CharacterStore


class StaleLineIndexError(RuntimeError):
    """Raised when an index is consulted after the store has changed."""


class LineIndex:
    """Maps contiguous 0-based line numbers to the first cell of each line.

    The index remembers the store generation, origin and line height it
    was built with. It is only valid for that exact store content.
    """

    def __init__(self, generation: int, line_height: float,
                 start_x: float = 0.0, start_y: float = 0.0):
        self.generation = generation
        self.line_height = line_height
        self.start_x = start_x
        self.start_y = start_y
        self._first_cells: list[int] = []

    def __len__(self) -> int:
        return len(self._first_cells)

    def __eq__(self, other) -> bool:
        if not isinstance(other, LineIndex):
            return NotImplemented
        return (
            self.generation == other.generation
            and self.line_height == other.line_height
            and self.start_x == other.start_x
            and self.start_y == other.start_y
            and self._first_cells == other._first_cells
        )

    def record(self, line: int, cell_id: int) -> None:
        """Record ``cell_id`` as the first cell of ``line``.

        Lines must be recorded in order, each exactly once.
        """
        if line != len(self._first_cells):
            raise ValueError(
                f"Line {line} recorded out of order, expected {len(self._first_cells)}"
            )
        self._first_cells.append(cell_id)

    def first_cell(self, line: int) -> Optional[int]:
        """Return the first cell id of ``line``, or None if no such line."""
        if 0 <= line < len(self._first_cells):
            return self._first_cells[line]
        return None

    def line_number(self, y: float) -> int:
        """Convert a y coordinate into a line number."""
        if self.line_height <= 0:
            return 0
        return int((y - self.start_y) / self.line_height)

    def line_top(self, line: int) -> float:
        return self.start_y + line * self.line_height

    def total_height(self) -> float:
        return self.line_height * len(self._first_cells)

    def is_fresh(self, store: CharacterStore) -> bool:
        return self.generation == store.generation

    def ensure_fresh(self, store: CharacterStore) -> None:
        """Raise StaleLineIndexError unless built for the current content."""
        if not self.is_fresh(store):
            raise StaleLineIndexError(
                f"Line index built for generation {self.generation}, "
                f"store is at {store.generation}"
            )
