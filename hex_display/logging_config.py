"""
Logging setup for hex_display.

Diagnostics always go to stderr so they never interleave with dump rows or
restored bytes on stdout. Each engine module logs under 'hex_display.<name>'
('chunker', 'hex_dump', 'reverse', 'cli'), so a single module can be turned
up to DEBUG while the rest stays quiet.
"""

import logging
import sys
from typing import Optional


class LoggingManager:
    """Configures the 'hex_display' logger tree for one process."""

    ROOT_LOGGER = 'hex_display'
    FORMAT = '%(levelname)s [%(name)s] %(message)s'
    # Above CRITICAL, so nothing gets through
    SILENT = logging.CRITICAL + 1

    class ColoredFormatter(logging.Formatter):
        """Formatter that colors the level name for terminal stderr."""

        COLORS = {
            'DEBUG': '\033[36m',     # Cyan
            'INFO': '\033[32m',      # Green
            'WARNING': '\033[33m',   # Yellow
            'ERROR': '\033[31m',     # Red
            'CRITICAL': '\033[35m',  # Magenta
        }
        RESET = '\033[0m'

        def __init__(self, fmt=None, use_color=True):
            super().__init__(fmt)
            self.use_color = use_color

        def format(self, record):
            # Color a copy; other handlers keep the plain level name
            if self.use_color and record.levelname in self.COLORS:
                record = logging.makeLogRecord(record.__dict__)
                record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
            return super().format(record)

    @staticmethod
    def level_value(name: str) -> int:
        """Numeric level for a level name; unknown names fall back to WARNING."""
        return getattr(logging, name.upper(), logging.WARNING)

    @classmethod
    def setup(cls, level: str = 'WARNING', module_levels: Optional[dict] = None, use_color: bool = True):
        """
        Configure logging for a dump or reverse run.

        Calling it again replaces the handler installed by the previous call.

        Args:
            level: Level for the whole package (DEBUG, INFO, WARNING, ERROR, CRITICAL, NONE)
            module_levels: Per-module overrides, e.g. {'chunker': 'DEBUG', 'reverse': 'INFO'}
            use_color: Color level names on stderr
        """
        root_logger = logging.getLogger(cls.ROOT_LOGGER)

        if level.upper() == 'NONE':
            root_logger.setLevel(cls.SILENT)
            return

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(cls.ColoredFormatter(cls.FORMAT, use_color=use_color))

        for existing in list(root_logger.handlers):
            root_logger.removeHandler(existing)
        root_logger.setLevel(cls.level_value(level))
        root_logger.addHandler(handler)

        for module, mod_level in (module_levels or {}).items():
            cls.get_logger(module).setLevel(cls.level_value(mod_level))

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Logger of one engine module, e.g. get_logger('chunker')."""
        return logging.getLogger(f'{cls.ROOT_LOGGER}.{name}')


def setup_logging(level: str = 'WARNING', module_levels: Optional[dict] = None, use_color: bool = True):
    """Configure package logging. See LoggingManager.setup()."""
    LoggingManager.setup(level, module_levels, use_color)


def get_logger(name: str) -> logging.Logger:
    """Module logger under 'hex_display'. See LoggingManager.get_logger()."""
    return LoggingManager.get_logger(name)
