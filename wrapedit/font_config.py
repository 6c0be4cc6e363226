"""Font configuration for the wrapedit editor.

The whole document shares a single font. Changing its size produces a new
``FontSpec``; every cell picks it up on the next reflow.
"""

from dataclasses import dataclass, replace
from typing import Dict, Optional

from .constants import EditorConstants


@dataclass(frozen=True)
class FontSpec:
    """A font family at a given point size.

    Attributes:
        name: Font family name handed to the metrics provider
        size: Point size, never negative
        monospace: Whether every glyph has the same advance
    """
    name: str
    size: int
    monospace: bool = False

    def resized(self, delta: int) -> 'FontSpec':
        """Return a copy with ``delta`` added to the size, floored at 0."""
        return replace(self, size=max(0, self.size + delta))

    @classmethod
    def default(cls) -> 'FontSpec':
        """The font a fresh buffer starts with."""
        return cls(
            name=EditorConstants.STARTING_FONT_NAME,
            size=EditorConstants.STARTING_FONT_SIZE,
        )


# Pre-defined font configurations
FONT_SPECS: Dict[str, FontSpec] = {
    "Verdana": FontSpec(name="Verdana", size=EditorConstants.STARTING_FONT_SIZE),
    "Courier": FontSpec(name="Courier", size=EditorConstants.STARTING_FONT_SIZE, monospace=True),
}


def get_font_spec(font_name: str) -> Optional[FontSpec]:
    """Get font configuration by name.

    Args:
        font_name: Name of the font

    Returns:
        FontSpec if found, None otherwise
    """
    return FONT_SPECS.get(font_name)
