import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional

from .constants import EditorConstants
from .font_config import FontSpec
from .line_index import LineIndex
from .metrics import MetricsProvider, MonospaceMetrics
from .navigator import CursorNavigator, CursorPosition
from .persistence import SaveResult, save_document
from .reflow import ReflowEngine
from .storage import BOUNDARY, NEWLINE, Cell, CharacterStore
from .undo import EditKind, EditMode, UndoEvent, UndoManager

logger = logging.getLogger(__name__)


class TextView(ABC):
    """Presentation side of the buffer.

    The model tells the view about every cell it links or unlinks and asks
    it to render once a command has finished.
    """
    _model: "Optional[TextModel]" = None

    @property
    def model(self):
        assert self._model
        return self._model

    def cell_inserted(self, cell_id: int, cell: Cell) -> None:
        """A cell became part of the document."""

    def cell_removed(self, cell_id: int, cell: Cell) -> None:
        """A cell left the document."""

    @abstractmethod
    def render(self):
        """Redraw from the model's freshly reflowed cells."""


class NullView(TextView):
    """A view that draws nothing, for headless use."""

    def render(self):
        pass


class TextModel:
    """Single owner of the buffer state.

    Each public operation runs to completion: store mutation, reflow,
    line index rebuild, cursor geometry, undo bookkeeping, view render.
    """
    store: CharacterStore
    index: LineIndex
    view: TextView

    def __init__(
        self,
        view: Optional[TextView] = None,
        metrics: Optional[MetricsProvider] = None,
        font: Optional[FontSpec] = None,
        window_width: int = EditorConstants.STARTING_WINDOW_WIDTH,
        window_height: int = EditorConstants.STARTING_WINDOW_HEIGHT,
        start_x: float = EditorConstants.STARTING_TEXT_POSITION_X,
        start_y: float = EditorConstants.STARTING_TEXT_POSITION_Y,
        margin: float = EditorConstants.MARGIN,
        undo_capacity: int = EditorConstants.UNDO_CAPACITY,
    ):
        self.view = view or NullView()
        self.view._model = self
        self.metrics = metrics or MonospaceMetrics()
        self.font = font or FontSpec.default()
        self.window_width = window_width
        self.window_height = window_height
        self.margin = margin
        self.store = CharacterStore()
        self.navigator = CursorNavigator(self.store)
        self.undo_manager = UndoManager(undo_capacity)
        self.reflow_engine = ReflowEngine(self.metrics, start_x, start_y)
        self.mode = EditMode.NORMAL
        self.modified = False
        self.index = self.reflow()

    # --- Layout ---

    @property
    def max_width(self) -> float:
        return self.window_width - self.margin

    @property
    def line_height(self) -> float:
        return self.index.line_height

    def reflow(self) -> LineIndex:
        self.index = self.reflow_engine.reflow(self.store, self.font, self.max_width)
        return self.index

    def _refresh(self) -> CursorPosition:
        self.reflow()
        self.view.render()
        return self.cursor_position()

    def cursor_position(self) -> CursorPosition:
        return self.navigator.cursor_geometry(self.index)

    def text(self) -> str:
        return self.store.text()

    def line_count(self) -> int:
        return len(self.index)

    def total_height(self) -> float:
        return self.index.total_height()

    def line_cells(self, line: int) -> Iterator[Cell]:
        """Yield the visible cells of ``line``: no newline, no wrap-point space."""
        self.index.ensure_fresh(self.store)
        cell_id = self.index.first_cell(line)
        if cell_id is None:
            return
        while cell_id != BOUNDARY:
            cell = self.store.cell(cell_id)
            if cell.line != line or cell.is_newline:
                return
            if not cell.soft_break:
                yield cell
            cell_id = cell.next

    def line_text(self, line: int) -> str:
        return "".join(cell.content for cell in self.line_cells(line))

    # --- Store primitives with undo bookkeeping ---

    @contextmanager
    def replaying(self):
        """Suspend undo recording for the duration of the block."""
        previous = self.mode
        self.mode = EditMode.REPLAYING
        try:
            yield
        finally:
            self.mode = previous

    def insert_after_cursor(self, content: str) -> int:
        anchor = self.store.cursor
        cell_id = self.store.insert_after_cursor(content)
        if self.mode is EditMode.NORMAL:
            self.undo_manager.record(UndoEvent(EditKind.ADD, cell_id, content, anchor))
        self.view.cell_inserted(cell_id, self.store.cell(cell_id))
        return cell_id

    def relink_after_cursor(self, cell_id: int) -> None:
        self.store.relink_after_cursor(cell_id)
        self.view.cell_inserted(cell_id, self.store.cell(cell_id))

    def delete_at_cursor(self) -> Optional[str]:
        cell_id = self.store.cursor
        content = self.store.delete_at_cursor()
        if content is None:
            return None
        if self.mode is EditMode.NORMAL:
            self.undo_manager.record(
                UndoEvent(EditKind.DELETE, cell_id, content, self.store.cursor)
            )
        self.view.cell_removed(cell_id, self.store.cell(cell_id))
        return content

    # --- Commands ---

    def insert_char(self, char: str) -> CursorPosition:
        if char == "\r":
            char = NEWLINE
        self.insert_after_cursor(char)
        self.undo_manager.clear_redo()
        self.modified = True
        return self._refresh()

    def delete_backward(self) -> CursorPosition:
        if self.delete_at_cursor() is not None:
            self.undo_manager.clear_redo()
            self.modified = True
        return self._refresh()

    def undo(self) -> CursorPosition:
        if self.undo_manager.undo(self):
            self.modified = True
        return self._refresh()

    def redo(self) -> CursorPosition:
        if self.undo_manager.redo(self):
            self.modified = True
        return self._refresh()

    def move_left(self) -> CursorPosition:
        self.navigator.move_left()
        self.view.render()
        return self.cursor_position()

    def move_right(self) -> CursorPosition:
        self.navigator.move_right()
        self.view.render()
        return self.cursor_position()

    def move_up(self) -> CursorPosition:
        self.navigator.move_up(self.index)
        self.view.render()
        return self.cursor_position()

    def move_down(self) -> CursorPosition:
        self.navigator.move_down(self.index)
        self.view.render()
        return self.cursor_position()

    def click(self, x: float, y: float) -> CursorPosition:
        self.navigator.click(self.index, x, y)
        self.view.render()
        return self.cursor_position()

    def change_font_size(self, delta: int) -> CursorPosition:
        """Resize the document font; the cursor height follows the new line height."""
        self.font = self.font.resized(delta)
        logger.debug("Font size is now %d", self.font.size)
        return self._refresh()

    def resize(self, width: int, height: int) -> CursorPosition:
        self.window_width = width
        self.window_height = height
        return self._refresh()

    # --- Persistence ---

    def load_text(self, text: str) -> CursorPosition:
        """Append ``text`` after the cursor without recording history.

        The undo and redo stacks are emptied: the loaded content is the
        starting point of the session.
        """
        with self.replaying():
            for char in text:
                self.insert_after_cursor(char)
        self.undo_manager.clear()
        logger.debug("Buffer populated with %d characters", len(self.store))
        self.modified = False
        return self._refresh()

    def save(self, path: str) -> SaveResult:
        result = save_document(path, self.text())
        if result.ok:
            self.modified = False
        return result
