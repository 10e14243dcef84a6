"""
Structured console logger

One line per event, details hang below it as a tree:

    [14:23:45] GIF       ✓ Encoded animation
               ├─ frames: 11
               └─ bytes: 2048

Modules bind a category once at import time:

    log = get_logger().for_category(LogCategory.EDITOR)
    log.info("Pixel toggled", frame=0, cell="(2, 5)")
"""

from datetime import datetime
from typing import Iterable, List, Optional

from neomatrix.models.enums import LogLevel, LogCategory


class Colors:
    """ANSI escape codes"""
    RESET = '\033[0m'
    DIM = '\033[2m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_MAGENTA = '\033[95m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'


CATEGORY_COLORS = {
    LogCategory.CONFIG: Colors.CYAN,
    LogCategory.EDITOR: Colors.BRIGHT_GREEN,
    LogCategory.HISTORY: Colors.BRIGHT_CYAN,
    LogCategory.MARQUEE: Colors.BRIGHT_YELLOW,
    LogCategory.PLAYBACK: Colors.YELLOW,
    LogCategory.CODEGEN: Colors.BRIGHT_MAGENTA,
    LogCategory.GIF: Colors.MAGENTA,
    LogCategory.CODEC: Colors.BRIGHT_BLUE,
    LogCategory.STORAGE: Colors.BLUE,
    LogCategory.API: Colors.CYAN,
    LogCategory.SYSTEM: Colors.BRIGHT_WHITE,
}

# level -> (priority, symbol, color)
LEVEL_STYLE = {
    LogLevel.DEBUG: (0, '·', Colors.DIM),
    LogLevel.INFO: (1, '✓', Colors.GREEN),
    LogLevel.WARN: (2, '⚠', Colors.YELLOW),
    LogLevel.ERROR: (3, '✗', Colors.RED),
}

CATEGORY_WIDTH = 9
DETAIL_INDENT = " " * 11


class Logger:
    """
    Process-wide structured logger

    Never instantiate directly in application code, use get_logger().
    """

    def __init__(self, min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
        self.min_level = min_level
        self.use_colors = use_colors

    def enabled_for(self, level: LogLevel) -> bool:
        return LEVEL_STYLE[level][0] >= LEVEL_STYLE[self.min_level][0]

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{Colors.RESET}" if self.use_colors else text

    def format_lines(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel,
        details: Iterable[str] = ()
    ) -> List[str]:
        """Render one event as output lines (headline + detail tree)"""
        _, symbol, color = LEVEL_STYLE[level]
        headline = " ".join((
            datetime.now().strftime('[%H:%M:%S]'),
            self._paint(category.name.ljust(CATEGORY_WIDTH), CATEGORY_COLORS.get(category, Colors.WHITE)),
            self._paint(symbol, color),
            self._paint(message, color),
        ))

        details = list(details)
        lines = [headline]
        for i, detail in enumerate(details):
            branch = "└─" if i == len(details) - 1 else "├─"
            lines.append(f"{DETAIL_INDENT}{self._paint(branch, Colors.DIM)} {detail}")
        return lines

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        **fields
    ):
        """
        Log a message with optional detail lines

        Args:
            category: Subsystem the event belongs to
            message: Headline text
            level: DEBUG, INFO, WARN or ERROR
            details: Pre-formatted detail strings
            **fields: Extra details rendered as "key: value"
        """
        if not self.enabled_for(level):
            return

        tree = list(details or [])
        tree.extend(f"{key}: {value}" for key, value in fields.items())
        for line in self.format_lines(category, message, level, tree):
            print(line)

    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self, category)


class BoundLogger:
    """Logger with a fixed default category"""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self._category = category

    def log(self, message: str, level: LogLevel = LogLevel.INFO, category: Optional[LogCategory] = None, **kw):
        self._base.log(category or self._category, message, level, **kw)

    def debug(self, message: str, **kw): self.log(message, LogLevel.DEBUG, **kw)
    def info(self, message: str, **kw): self.log(message, LogLevel.INFO, **kw)
    def warn(self, message: str, **kw): self.log(message, LogLevel.WARN, **kw)
    def error(self, message: str, **kw): self.log(message, LogLevel.ERROR, **kw)

    def with_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self._base, category)


_logger = Logger()


def get_logger() -> Logger:
    return _logger


def get_category_logger(category: LogCategory) -> BoundLogger:
    return _logger.for_category(category)


def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
    """
    Reconfigure the singleton in place

    BoundLoggers created at import time keep pointing at it.
    """
    _logger.min_level = min_level
    _logger.use_colors = use_colors
