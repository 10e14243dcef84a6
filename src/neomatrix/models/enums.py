"""
Enums for the NeoMatrix frame editor
"""

from enum import Enum, auto


class Orientation(Enum):
    """
    Which physical corner of the LED matrix is addressed first.

    Values are the wire strings used in exported JSON ("top-left", ...).
    """
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"

    @classmethod
    def parse(cls, value, default: "Orientation" = None) -> "Orientation":
        """
        Parse wire string or enum name ("top-left", "TOP_LEFT").

        Unknown values return `default` when given, otherwise raise ValueError.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            for member in cls:
                if text == member.value or text.upper() == member.name:
                    return member
        if default is not None:
            return default
        raise ValueError(f"Invalid Orientation: {value}")


class ExportFormat(Enum):
    """Export artifact formats"""
    JSON = "json"
    CSV = "csv"
    RUST = "rust"
    GIF = "gif"


class EditorChange(Enum):
    """What kind of mutation the editor service just committed"""
    PIXELS = auto()       # toggle / clear
    FRAMES = auto()       # add / duplicate / delete / reorder / rename
    SELECTION = auto()    # current frame changed
    SETTINGS = auto()     # draw color, step delay
    GRID = auto()         # resize / orientation (pixels cleared)
    HISTORY = auto()      # undo / redo
    REPLACED = auto()     # import / load


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    EDITOR = auto()      # Frame/pixel mutations
    HISTORY = auto()     # Undo / redo
    MARQUEE = auto()     # Mega-frame layout
    PLAYBACK = auto()    # Scroll preview ticker
    CODEGEN = auto()     # Embedded source generation
    GIF = auto()         # Raster export
    CODEC = auto()       # JSON / CSV import & export
    STORAGE = auto()     # Autosave
    API = auto()
    SYSTEM = auto()      # Startup, shutdown, errors
