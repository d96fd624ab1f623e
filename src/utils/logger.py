"""
Console logger

Compact, category-tagged output for the watch face:

    [14:23:45] ANIMATION ✓ Glitch animation started
               ├─ target: '14:23:45'
               └─ tick_delay_ms: 33

Modules grab a bound logger once at import time:

    log = get_logger().for_category(LogCategory.WATCHFACE)
    log.info("Display mode changed", mode="AMBIENT")

configure_logger() adjusts the shared instance in place so those bound
loggers follow level/color changes made after config is loaded.
"""

import sys
from datetime import datetime
from typing import Callable, List, Optional, TextIO

from models.enums import LogLevel, LogCategory


class Ansi:
    """ANSI escape codes used by the logger"""
    RESET = '\033[0m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'


CATEGORY_COLORS = {
    LogCategory.CONFIG: Ansi.CYAN,
    LogCategory.ANIMATION: Ansi.BRIGHT_YELLOW,
    LogCategory.SCHEDULER: Ansi.BRIGHT_BLUE,
    LogCategory.WATCHFACE: Ansi.BRIGHT_GREEN,
    LogCategory.SYSTEM: Ansi.BRIGHT_WHITE,
    LogCategory.API: Ansi.BRIGHT_CYAN,
    LogCategory.SHUTDOWN: Ansi.MAGENTA,
}

# level -> (priority, symbol, color)
LEVEL_STYLES = {
    LogLevel.DEBUG: (0, '·', Ansi.DIM),
    LogLevel.INFO: (1, '✓', Ansi.GREEN),
    LogLevel.WARN: (2, '⚠', Ansi.YELLOW),
    LogLevel.ERROR: (3, '✗', Ansi.RED),
}

CATEGORY_WIDTH = 9
DETAIL_INDENT = " " * 11


class Logger:
    """
    Structured console logger.

    Args:
        min_level: Messages below this level are dropped
        use_colors: Emit ANSI colors (turn off when piping to a file)
        stream: Output stream; None means the current sys.stdout at write time
        clock: Timestamp source for the [HH:MM:SS] prefix
    """

    def __init__(
        self,
        min_level: LogLevel = LogLevel.INFO,
        use_colors: bool = True,
        stream: Optional[TextIO] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.min_level = min_level
        self.use_colors = use_colors
        self.stream = stream
        self._clock = clock

    def is_enabled(self, level: LogLevel) -> bool:
        return LEVEL_STYLES[level][0] >= LEVEL_STYLES[self.min_level][0]

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{Ansi.RESET}" if self.use_colors else text

    def format_lines(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        exception: Optional[BaseException] = None,
        **kwargs
    ) -> List[str]:
        """Render one log entry as its output lines (no filtering)."""
        _, symbol, level_color = LEVEL_STYLES[level]
        stamp = self._clock().strftime('[%H:%M:%S]')
        cat = self._paint(category.name.ljust(CATEGORY_WIDTH), CATEGORY_COLORS.get(category, Ansi.WHITE))

        lines = [f"{stamp} {cat} {self._paint(symbol, level_color)} {self._paint(message, level_color)}"]

        rows = [str(d) for d in (details or [])]
        rows.extend(f"{key}: {value}" for key, value in kwargs.items())
        if exception is not None:
            rows.append(f"error: {type(exception).__name__}: {exception}")

        for i, row in enumerate(rows):
            branch = "└─" if i == len(rows) - 1 else "├─"
            lines.append(f"{DETAIL_INDENT}{self._paint(branch, Ansi.DIM)} {row}")
        return lines

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        **kwargs
    ):
        """
        Write a message with optional detail rows.

        Args:
            category: Log category (ANIMATION, WATCHFACE, ...)
            message: Main message text
            level: Log level
            details: Free-form detail rows, printed before keyword details
            **kwargs: key: value detail rows; exception= adds the error type and text
        """
        if not self.is_enabled(level):
            return

        stream = self.stream or sys.stdout
        stream.write("\n".join(self.format_lines(category, message, level, details, **kwargs)) + "\n")

    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self, category)


class BoundLogger:
    """Logger with a default category; any call may still pass category=."""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self._category = category

    @property
    def category(self) -> LogCategory:
        return self._category

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
    """Update the shared logger in place (bound loggers keep pointing at it)."""
    _logger.min_level = min_level
    _logger.use_colors = use_colors
