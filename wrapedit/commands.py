"""Command pattern implementation for buffer actions."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, TYPE_CHECKING

from .constants import EditorConstants
from .keyboard import KeyType
from .navigator import CursorPosition
from .persistence import SaveResult

if TYPE_CHECKING:
    from .keyboard import KeyEvent
    from .model import TextModel


@dataclass
class CommandResult:
    """Outcome of a command: where to draw the cursor, and what changed."""
    cursor: CursorPosition
    modified: bool = False
    save_result: Optional[SaveResult] = None


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, model: 'TextModel') -> CommandResult:
        """Execute the command.

        Args:
            model: The buffer the command acts on

        Returns:
            The refreshed cursor geometry, plus whether the document changed
        """


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, model: 'TextModel') -> CommandResult:
        """Movement commands don't modify the document."""
        return CommandResult(cursor=self._move(model))

    @abstractmethod
    def _move(self, model: 'TextModel') -> CursorPosition:
        """Perform the movement."""


class MoveCursorLeft(MovementCommand):
    def _move(self, model):
        return model.move_left()


class MoveCursorRight(MovementCommand):
    def _move(self, model):
        return model.move_right()


class MoveCursorUp(MovementCommand):
    def _move(self, model):
        return model.move_up()


class MoveCursorDown(MovementCommand):
    def _move(self, model):
        return model.move_down()


@dataclass
class ClickAt(MovementCommand):
    x: float
    y: float

    def _move(self, model):
        return model.click(self.x, self.y)


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, model: 'TextModel') -> CommandResult:
        generation = model.store.generation
        cursor = self._edit(model)
        return CommandResult(cursor=cursor, modified=model.store.generation != generation)

    @abstractmethod
    def _edit(self, model: 'TextModel') -> CursorPosition:
        """Perform the edit."""


@dataclass
class InsertChar(EditCommand):
    char: str

    def _edit(self, model):
        return model.insert_char(self.char)


class DeleteBackward(EditCommand):
    def _edit(self, model):
        return model.delete_backward()


class Undo(EditCommand):
    def _edit(self, model):
        return model.undo()


class Redo(EditCommand):
    def _edit(self, model):
        return model.redo()


class SystemCommand(EditorCommand):
    """Base class for commands that leave the document content alone."""

    def execute(self, model: 'TextModel') -> CommandResult:
        self._execute_system(model)
        return CommandResult(cursor=model.cursor_position())

    @abstractmethod
    def _execute_system(self, model: 'TextModel'):
        """Perform the system action."""


@dataclass
class ChangeFontSize(SystemCommand):
    delta: int

    def _execute_system(self, model):
        model.change_font_size(self.delta)


@dataclass
class Resize(SystemCommand):
    width: int
    height: int

    def _execute_system(self, model):
        model.resize(self.width, self.height)


@dataclass
class Save(EditorCommand):
    path: str

    def execute(self, model: 'TextModel') -> CommandResult:
        result = model.save(self.path)
        return CommandResult(cursor=model.cursor_position(), save_result=result)


KeyBinding = Tuple[KeyType, str]


class CommandRegistry:
    """Maps key events to buffer commands."""

    def __init__(self):
        self._factories: Dict[KeyBinding, Callable[['KeyEvent'], EditorCommand]] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        step = EditorConstants.FONT_SIZE_STEP
        # Movement
        self.register((KeyType.SPECIAL, 'left'), lambda ev: MoveCursorLeft())
        self.register((KeyType.SPECIAL, 'right'), lambda ev: MoveCursorRight())
        self.register((KeyType.SPECIAL, 'up'), lambda ev: MoveCursorUp())
        self.register((KeyType.SPECIAL, 'down'), lambda ev: MoveCursorDown())
        # Editing
        self.register((KeyType.SPECIAL, 'enter'), lambda ev: InsertChar('\n'))
        self.register((KeyType.SPECIAL, 'backspace'), lambda ev: DeleteBackward())
        self.register((KeyType.CTRL, 'z'), lambda ev: Undo())
        self.register((KeyType.CTRL, 'y'), lambda ev: Redo())
        # Font size
        self.register((KeyType.ALT, '='), lambda ev: ChangeFontSize(step))
        self.register((KeyType.ALT, '+'), lambda ev: ChangeFontSize(step))
        self.register((KeyType.ALT, '-'), lambda ev: ChangeFontSize(-step))

    def register(self, key: KeyBinding, factory: Callable[['KeyEvent'], EditorCommand]):
        """Register a command factory for a key combination."""
        self._factories[key] = factory

    def get_command(self, key_event: 'KeyEvent') -> Optional[EditorCommand]:
        """Build the command bound to ``key_event``, if any.

        Printable regular keys insert themselves.
        """
        factory = self._factories.get((key_event.key_type, key_event.value))
        if factory is not None:
            return factory(key_event)
        if key_event.key_type == KeyType.REGULAR and key_event.value:
            char = key_event.value
            # Filter out control characters
            if len(char) == 1 and (ord(char) >= 32 and char != '\x7f' or char == '\t'):
                return InsertChar(char)
        return None

    def execute(self, model: 'TextModel', key_event: 'KeyEvent') -> Optional[CommandResult]:
        """Run the command bound to ``key_event``.

        Returns:
            The command result, or None if the key is not bound
        """
        command = self.get_command(key_event)
        if command is None:
            return None
        return command.execute(model)
