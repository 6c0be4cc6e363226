import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .constants import EditorConstants

if TYPE_CHECKING:
    from .model import TextModel

logger = logging.getLogger(__name__)


class EditKind(Enum):
    ADD = "add"
    DELETE = "delete"


class EditMode(Enum):
    """Whether edits come from the user or from undo/redo replay."""
    NORMAL = "normal"
    REPLAYING = "replaying"


@dataclass(frozen=True)
class UndoEvent:
    kind: EditKind
    cell_id: int
    content: str
    anchor: int  # Element the cell follows; the cursor goes here to insert it


class UndoManager:
    def __init__(self, max_entries: int = EditorConstants.UNDO_CAPACITY):
        self._undo_stack: list[UndoEvent] = []
        self._redo_stack: list[UndoEvent] = []
        self._max_entries = max_entries

    def clear(self):
        self._undo_stack.clear()
        self._redo_stack.clear()

    def clear_redo(self):
        self._redo_stack.clear()

    def record(self, event: UndoEvent):
        self._undo_stack.append(event)
        # Cap history
        if len(self._undo_stack) > self._max_entries:
            self._undo_stack.pop(0)

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    def undo(self, model: 'TextModel') -> bool:
        if not self._undo_stack:
            return False
        event = self._undo_stack.pop()
        self._redo_stack.append(event)
        logger.debug("Undoing %s of %r", event.kind.value, event.content)
        with model.replaying():
            if event.kind is EditKind.ADD:
                model.store.move_to(event.cell_id)
                model.delete_at_cursor()
            else:
                model.store.move_to(event.anchor)
                model.relink_after_cursor(event.cell_id)
        return True

    def redo(self, model: 'TextModel') -> bool:
        if not self._redo_stack:
            return False
        event = self._redo_stack.pop()
        # Return event to undo stack
        self._undo_stack.append(event)
        logger.debug("Redoing %s of %r", event.kind.value, event.content)
        with model.replaying():
            if event.kind is EditKind.ADD:
                model.store.move_to(event.anchor)
                model.relink_after_cursor(event.cell_id)
            else:
                model.store.move_to(event.cell_id)
                model.delete_at_cursor()
        return True
