"""Terminal presentation of the buffer.

The view keeps one glyph per visible cell, the same way a scene graph
would keep one text node per character. Rendering reads the coordinates
the reflow engine assigned and paints the glyphs that fall inside the
scrolled window into a grid of rows.
"""

from typing import Optional

from .model import TextView
from .storage import Cell

TAB = "\t"


class TerminalTextView(TextView):
    num_rows: int = 24
    num_columns: int = 80
    scroll_offset: float = 0.0  # Distance from the document top to the window top
    lines: list[str] = []
    visual_cursor_y: int = 0
    visual_cursor_x: int = 0

    def __init__(self, num_rows: int = 24, num_columns: int = 80):
        self.num_rows = num_rows
        self.num_columns = num_columns
        self.lines = []
        self.glyphs: dict[int, Cell] = {}

    def cell_inserted(self, cell_id: int, cell: Cell) -> None:
        if not cell.is_newline:
            self.glyphs[cell_id] = cell

    def cell_removed(self, cell_id: int, cell: Cell) -> None:
        self.glyphs.pop(cell_id, None)

    def content_height(self) -> float:
        """Height of the laid-out lines, including the cursor's empty last line."""
        cursor = self.model.cursor_position()
        cursor_bottom = cursor.y - self.model.index.start_y + cursor.height
        return max(self.model.total_height(), cursor_bottom)

    def max_scroll(self) -> float:
        """Largest scroll offset that still shows the last line."""
        return max(0.0, self.content_height() - self.model.window_height)

    def scroll_to(self, offset: float) -> None:
        self.scroll_offset = min(max(0.0, offset), self.max_scroll())

    def snap_to_cursor(self) -> None:
        """Scroll just enough to bring the cursor back into the window."""
        cursor = self.model.cursor_position()
        top = cursor.y - self.model.index.start_y
        offset = self.scroll_offset
        if top < offset:
            offset = top
        elif top + cursor.height > offset + self.model.window_height:
            offset = top + cursor.height - self.model.window_height
        self.scroll_to(offset)

    def render(self):
        self.snap_to_cursor()
        index = self.model.index
        line_height = index.line_height
        first_line = int(self.scroll_offset // line_height)
        rows: list[list[str]] = [[" "] * self.num_columns for _ in range(self.num_rows)]

        for cell in self.glyphs.values():
            if cell.soft_break:
                continue
            row = cell.line - first_line
            col = int(cell.x - index.start_x)
            if not (0 <= row < self.num_rows and 0 <= col < self.num_columns):
                continue
            # Tabs are painted as blanks over their measured width
            is_tab = cell.content == TAB
            rows[row][col] = " " if is_tab else cell.content
            # Wide glyphs cover the following columns
            for extra in range(1, int(cell.width)):
                if col + extra < self.num_columns:
                    rows[row][col + extra] = " " if is_tab else ""

        self.lines = ["".join(row).rstrip() for row in rows]
        cursor = self.model.cursor_position()
        self.visual_cursor_y = int((cursor.y - index.start_y) // line_height) - first_line
        self.visual_cursor_x = min(int(cursor.x - index.start_x), self.num_columns - 1)

    def cursor_row(self) -> Optional[int]:
        """Row of the cursor inside the window, or None when scrolled away."""
        if 0 <= self.visual_cursor_y < self.num_rows:
            return self.visual_cursor_y
        return None
