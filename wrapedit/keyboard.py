"""Keyboard input handling for blessed keystrokes."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key string from blessed
    is_alt: bool = False
    is_ctrl: bool = False
    is_sequence: bool = False
    code: Optional[int] = None


# blessed key names to the names commands are bound to
_SPECIAL_NAMES = {
    'KEY_LEFT': 'left',
    'KEY_RIGHT': 'right',
    'KEY_UP': 'up',
    'KEY_DOWN': 'down',
    'KEY_ENTER': 'enter',
    'KEY_BACKSPACE': 'backspace',
    'KEY_DELETE': 'backspace',
    'KEY_ESCAPE': 'escape',
    'KEY_HOME': 'home',
    'KEY_END': 'end',
}


class KeyboardHandler:
    """Turns blessed keystrokes into ``KeyEvent`` objects."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get the next key event, or None when nothing arrived in time."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a blessed key into a KeyEvent.

        Args:
            key: blessed.keyboard.Keystroke object

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)
        code = getattr(key, 'code', None)

        if getattr(key, 'is_sequence', False):
            name = getattr(key, 'name', None) or ''
            if name in _SPECIAL_NAMES:
                return KeyEvent(
                    key_type=KeyType.SPECIAL,
                    value=_SPECIAL_NAMES[name],
                    raw=key_str,
                    is_sequence=True,
                    code=code,
                )
            # ESC followed by a character: Alt/Meta combination
            if len(key_str) == 2 and key_str[0] == '\x1b':
                return KeyEvent(key_type=KeyType.ALT, value=key_str[1], raw=key_str, is_alt=True)
            # Fallback: treat unknown sequences as special
            value = name[4:].lower() if name.startswith('KEY_') else key_str
            return KeyEvent(key_type=KeyType.SPECIAL, value=value, raw=key_str,
                            is_sequence=True, code=code)

        if len(key_str) == 2 and key_str[0] == '\x1b':
            return KeyEvent(key_type=KeyType.ALT, value=key_str[1], raw=key_str, is_alt=True)

        if len(key_str) == 1:
            o = ord(key_str)
            if key_str in ('\r', '\n'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if key_str in ('\x7f', '\x08'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if key_str == '\t':
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z (exclude ESC=27)
                ch = chr(ord('a') + o - 1)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)
            if key_str == '\x1b':
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)

        # Regular character
        return KeyEvent(
            key_type=KeyType.REGULAR,
            value=key_str,
            raw=key_str,
            is_sequence=False
        )
