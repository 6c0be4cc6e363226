"""Character storage: an arena-backed doubly linked list of cells.

Every character of the document is a ``Cell`` stored in a flat list and
addressed by its index in that list. Slot 0 is the boundary element: it
is not a character, its ``next`` is the first cell and its ``prev`` is the
last cell, so "before the first character" is an ordinary position.

Removing a cell only unlinks it. The slot keeps its id and content so the
undo manager can relink exactly the same cell later.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

BOUNDARY = 0
NEWLINE = "\n"
SPACE = " "


@dataclass
class Cell:
    """One document character plus the geometry cached by the last reflow.

    ``x``, ``y``, ``line``, ``width`` and ``soft_break`` are only meaningful
    right after a reflow of the current content.
    """
    content: str
    prev: int = BOUNDARY
    next: int = BOUNDARY
    linked: bool = True
    x: float = 0.0
    y: float = 0.0
    line: int = 0
    width: float = 0.0
    soft_break: bool = False

    @property
    def is_newline(self) -> bool:
        return self.content == NEWLINE

    @property
    def is_space(self) -> bool:
        return self.content == SPACE


class CharacterStore:
    """Ordered cells with a cursor.

    The cursor holds the id of the element the insertion point follows:
    ``BOUNDARY`` when it sits before the first character.
    """

    def __init__(self):
        boundary = Cell("")
        self._cells: list[Cell] = [boundary]
        self.cursor: int = BOUNDARY
        self.generation: int = 0  # Bumped on every structural change
        self._length = 0

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[tuple[int, Cell]]:
        """Yield ``(cell_id, cell)`` pairs in document order."""
        cell_id = self._cells[BOUNDARY].next
        while cell_id != BOUNDARY:
            cell = self._cells[cell_id]
            yield cell_id, cell
            cell_id = cell.next

    def text(self) -> str:
        return "".join(cell.content for _, cell in self)

    def cell(self, cell_id: int) -> Cell:
        """Return the cell stored under ``cell_id``.

        Raises:
            KeyError: if the id was never allocated or names the boundary
        """
        if cell_id <= BOUNDARY or cell_id >= len(self._cells):
            raise KeyError(cell_id)
        return self._cells[cell_id]

    @property
    def cursor_cell(self) -> Optional[Cell]:
        """The cell under the cursor, or None at the boundary."""
        if self.cursor == BOUNDARY:
            return None
        return self._cells[self.cursor]

    def first(self) -> int:
        return self._cells[BOUNDARY].next

    def last(self) -> int:
        return self._cells[BOUNDARY].prev

    def next_of(self, cell_id: int) -> int:
        return self._cells[cell_id].next

    def prev_of(self, cell_id: int) -> int:
        return self._cells[cell_id].prev

    def is_linked(self, cell_id: int) -> bool:
        if cell_id == BOUNDARY:
            return True
        return 0 < cell_id < len(self._cells) and self._cells[cell_id].linked

    # --- Cursor state ---

    def is_at_start(self) -> bool:
        return self.cursor == BOUNDARY

    def is_at_end(self) -> bool:
        return self._cells[self.cursor].next == BOUNDARY

    def move_to(self, cell_id: int) -> None:
        """Place the cursor after ``cell_id``.

        Raises:
            KeyError: if ``cell_id`` is not currently part of the document
        """
        if not self.is_linked(cell_id):
            raise KeyError(cell_id)
        self.cursor = cell_id

    def move_to_last(self) -> None:
        self.cursor = self.last()

    def move_to_start(self) -> None:
        self.cursor = BOUNDARY

    def advance(self) -> bool:
        """Move the cursor one element forward.

        A wrap-point space consumed by the reflow engine is stepped over,
        so the soft line break counts as a single stop. Returns False at
        the end of the document.
        """
        if self.is_at_end():
            return False
        target = self._cells[self.cursor].next
        if self._cells[target].soft_break and self._cells[target].next != BOUNDARY:
            target = self._cells[target].next
        self.cursor = target
        return True

    def retreat(self) -> bool:
        """Move the cursor one element back, stepping over a wrap point.

        Returns False at the start of the document.
        """
        if self.is_at_start():
            return False
        target = self._cells[self.cursor].prev
        if target != BOUNDARY and self._cells[target].soft_break:
            target = self._cells[target].prev
        self.cursor = target
        return True

    # --- Mutation ---

    def insert_after_cursor(self, content: str) -> int:
        """Insert a new cell after the cursor and move the cursor onto it.

        Returns:
            The id of the new cell

        Raises:
            ValueError: if ``content`` is not exactly one character
        """
        if len(content) != 1:
            raise ValueError(f"A cell holds exactly one character, got {content!r}")
        cell_id = len(self._cells)
        self._cells.append(Cell(content))
        self._link_after_cursor(cell_id)
        return cell_id

    def relink_after_cursor(self, cell_id: int) -> None:
        """Put a previously removed cell back, right after the cursor.

        Raises:
            KeyError: if the id is unknown or the cell is still linked
        """
        cell = self.cell(cell_id)
        if cell.linked:
            raise KeyError(cell_id)
        self._link_after_cursor(cell_id)

    def _link_after_cursor(self, cell_id: int) -> None:
        cell = self._cells[cell_id]
        before = self._cells[self.cursor]
        after = self._cells[before.next]
        cell.prev = self.cursor
        cell.next = before.next
        cell.linked = True
        cell.soft_break = False
        after.prev = cell_id
        before.next = cell_id
        self.cursor = cell_id
        self._length += 1
        self.generation += 1

    def delete_at_cursor(self) -> Optional[str]:
        """Unlink the cell under the cursor.

        The cursor moves to the predecessor in the same step.

        Returns:
            The removed content, or None when the cursor is at the start
        """
        if self.cursor == BOUNDARY:
            return None
        cell = self._cells[self.cursor]
        self._cells[cell.prev].next = cell.next
        self._cells[cell.next].prev = cell.prev
        self.cursor = cell.prev
        cell.linked = False
        self._length -= 1
        self.generation += 1
        return cell.content
