"""
Color model - 24-bit RGB color

Immutable and hashable so it can key the GIF palette table.
Wire format is lowercase "#rrggbb".
"""

from dataclasses import dataclass
from typing import Tuple

from neomatrix.models.errors import InvalidColorError


@dataclass(frozen=True)
class Color:
    """
    24-bit RGB color

    Examples:
        color = Color.from_hex("#ff0000")
        r, g, b = color.to_rgb()
        color.to_hex()  # "#ff0000"
    """

    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self):
        for channel in (self.r, self.g, self.b):
            if not isinstance(channel, int) or isinstance(channel, bool) or not 0 <= channel <= 255:
                raise InvalidColorError((self.r, self.g, self.b))

    # === CONSTRUCTORS ===

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> 'Color':
        return cls(r, g, b)

    @classmethod
    def from_hex(cls, value: str) -> 'Color':
        """
        Parse "#rrggbb" / "#rgb" (leading # optional, any case)

        Raises:
            InvalidColorError: text is not a hex color
        """
        if not isinstance(value, str):
            raise InvalidColorError(value)

        text = value.strip().lstrip('#')
        if len(text) == 3:
            text = ''.join(ch * 2 for ch in text)
        if len(text) != 6:
            raise InvalidColorError(value)

        try:
            return cls(int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
        except ValueError:
            raise InvalidColorError(value)

    @classmethod
    def parse(cls, value) -> 'Color':
        """Accept a Color, hex string or (r, g, b) sequence"""
        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        if isinstance(value, (list, tuple)) and len(value) == 3:
            return cls.from_rgb(*value)
        raise InvalidColorError(value)

    # === RENDERING ===

    def to_rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @staticmethod
    def black() -> 'Color':
        return Color(0, 0, 0)

    @staticmethod
    def red() -> 'Color':
        return Color(255, 0, 0)

    def __str__(self) -> str:
        return self.to_hex()
