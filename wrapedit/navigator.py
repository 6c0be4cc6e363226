"""Cursor placement: geometry, click resolution and arrow movement.

All lookups go through a ``LineIndex`` and refuse to run against a stale
one, so the cell coordinates they read are always current.
"""

from dataclasses import dataclass

from .line_index import LineIndex
from .storage import BOUNDARY, CharacterStore


@dataclass
class CursorPosition:
    """Where the cursor is drawn: top-left corner and height."""
    x: float = 0.0
    y: float = 0.0
    height: float = 0.0


class CursorNavigator:
    """Moves the store's cursor using the geometry from the last reflow."""

    def __init__(self, store: CharacterStore):
        self.store = store

    def cursor_geometry(self, index: LineIndex) -> CursorPosition:
        """Return the on-screen position of the insertion point.

        After the boundary it is the origin. After a hard newline or a
        wrap-point space it is the start of the following line. Otherwise
        it is the right edge of the cell under the cursor.
        """
        index.ensure_fresh(self.store)
        cell = self.store.cursor_cell
        if cell is None:
            return CursorPosition(index.start_x, index.start_y, index.line_height)
        if cell.is_newline or cell.soft_break:
            return CursorPosition(index.start_x, index.line_top(cell.line + 1), index.line_height)
        return CursorPosition(cell.x + cell.width, cell.y, index.line_height)

    def coordinate_to_position(self, index: LineIndex, x: float, y: float) -> bool:
        """Put the cursor on the cell of line ``y`` nearest to ``x``.

        The scan walks right along the line while the cell's right edge is
        left of ``x`` and stops at a hard newline, the cell before one, the
        last cell of the line or the end of the document.

        Returns:
            False if there is no line at ``y``; the cursor is untouched
        """
        index.ensure_fresh(self.store)
        line = index.line_number(y)
        cell_id = index.first_cell(line)
        if cell_id is None:
            return False
        cell = self.store.cell(cell_id)
        while cell.x + cell.width < x:
            following = cell.next
            if cell.is_newline or following == BOUNDARY:
                break
            next_cell = self.store.cell(following)
            if next_cell.is_newline or next_cell.line != cell.line:
                break
            cell_id, cell = following, next_cell
        self.store.move_to(cell_id)
        return True

    def is_left_of_midpoint(self, x: float) -> bool:
        """True when ``x`` falls in the left half of the cursor's cell."""
        cell = self.store.cursor_cell
        if cell is None:
            return False
        return cell.x + 0.5 * cell.width > x

    def _settle(self, x: float) -> None:
        """Choose between before and after the resolved cell.

        A newline or a wrap-point space at the end of a line can only be
        clicked from its left side: after it is the next line.
        """
        cell = self.store.cursor_cell
        if cell is None:
            return
        if cell.is_newline or cell.soft_break or self.is_left_of_midpoint(x):
            self.store.move_to(cell.prev)

    def click(self, index: LineIndex, x: float, y: float) -> bool:
        """Place the cursor at a clicked point.

        Below the last line the cursor goes to the end of the document.

        Returns:
            False if the click missed every line
        """
        if self.coordinate_to_position(index, x, y):
            self._settle(x)
            return True
        self.store.move_to_last()
        return False

    def move_left(self) -> bool:
        return self.store.retreat()

    def move_right(self) -> bool:
        return self.store.advance()

    def move_up(self, index: LineIndex) -> bool:
        """Move to the closest column on the previous line; no-op on line 0."""
        here = self.cursor_geometry(index)
        if self.coordinate_to_position(index, here.x, here.y - index.line_height):
            self._settle(here.x)
            return True
        return False

    def move_down(self, index: LineIndex) -> bool:
        """Move to the closest column on the next line.

        From the last line the cursor goes to the end of the document,
        which is a no-op if it is already there.
        """
        here = self.cursor_geometry(index)
        if self.coordinate_to_position(index, here.x, here.y + index.line_height):
            self._settle(here.x)
            return True
        self.store.move_to_last()
        return False
