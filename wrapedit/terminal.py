"""Terminal interface using Blessed for display and input."""

import blessed
from typing import Optional


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False

    @property
    def width(self) -> int:
        return self.term.width

    @property
    def height(self) -> int:
        return self.term.height

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def get_key(self, timeout: Optional[float] = None):
        """Read one keystroke; returns an empty keystroke on timeout."""
        return self.term.inkey(timeout=timeout)

    def draw_lines(self, lines: list[str], cursor_y: Optional[int], cursor_x: int,
                   status_override: Optional[str] = None):
        """Draw text lines, the status line, and position the cursor.

        Args:
            lines: List of strings to display, one per row
            cursor_y: Cursor row (0-based), or None to hide the cursor
            cursor_x: Cursor column (0-based)
            status_override: Custom status message to display instead of default
        """
        out = [self.term.home + self.term.clear]
        for y, line in enumerate(lines[:self.term.height - 1]):
            out.append(self.term.move(y, 0) + line)

        # Status line at bottom
        status = status_override or "Ctrl-S save  Ctrl-Z undo  Ctrl-Y redo  Ctrl-Q quit"
        out.append(self.term.move(self.term.height - 1, 0))
        out.append(self.term.reverse + status[:self.term.width].ljust(self.term.width) + self.term.normal)

        if cursor_y is None:
            out.append(self.term.hide_cursor)
        else:
            out.append(self.term.move(cursor_y, cursor_x) + self.term.normal_cursor)
        print(''.join(out), end='', flush=True)
