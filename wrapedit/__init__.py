"""wrapedit - a character buffer with greedy word wrap, undo and a terminal front end."""

from .model import TextModel, TextView
from .navigator import CursorPosition
from .view import TerminalTextView

__all__ = [
    'TextModel',
    'TextView',
    'CursorPosition',
    'TerminalTextView',
]
