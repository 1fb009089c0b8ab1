"""
Semantic styles and the stylers that turn them into terminal output.

The engine only ever asks for a semantic Style; what a style looks like is
decided by the Styler handed to the LineComposer.
"""

import re
from enum import Enum
from typing import Optional


class Style(Enum):
    """Semantic style requested by the renderers."""
    OFFSET = 'offset'
    DIM = 'dim'
    PRINTABLE = 'printable'
    CONTROL = 'control'
    HIGH = 'high'
    NUMERIC = 'numeric'
    UNICODE = 'unicode'
    ERROR = 'error'


# Matches ANSI SGR sequences (colors, bold, reset)
SGR_PATTERN = re.compile(r'\x1b\[[0-9;]*m')
RESET = '\033[0m'
RESET_SEQUENCES = {RESET, '\033[m'}


def strip_styles(text: str) -> str:
    """Remove ANSI SGR escape sequences from text."""
    return SGR_PATTERN.sub('', text)


def close_open_styles(line: str) -> str:
    """Append a reset if the last SGR sequence on the line is not one."""
    last = None
    for last in SGR_PATTERN.finditer(line):
        pass
    if last is not None and last.group(0) not in RESET_SEQUENCES:
        return line + RESET
    return line


class Styler:
    """Applies semantic styles to spans of text. The base class is a no-op."""

    def apply(self, text: str, style: Optional[Style]) -> str:
        """
        Apply a style to a span of text.

        Args:
            text: Span text
            style: Semantic style, or None for unstyled text

        Returns:
            Text ready to be written to the sink
        """
        return text

    def terminate(self, line: str) -> str:
        """Close any style left open at the end of a line."""
        return line


class PlainStyler(Styler):
    """Styler used when color is disabled."""
    pass


class AnsiStyler(Styler):
    """Maps semantic styles to ANSI SGR escape sequences."""

    # ANSI color codes
    GRAY = '\033[90m'
    BOLD = '\033[1m'
    GREEN = '\033[32m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_RED = '\033[91m'
    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_MAGENTA = '\033[95m'
    RESET = '\033[0m'

    STYLE_CODES = {
        Style.OFFSET: BRIGHT_BLUE,
        Style.DIM: GRAY,
        Style.PRINTABLE: BRIGHT_GREEN,
        Style.NUMERIC: BRIGHT_CYAN,
        Style.CONTROL: BRIGHT_YELLOW,
        Style.HIGH: BRIGHT_MAGENTA,
        Style.UNICODE: BOLD + GREEN,
        Style.ERROR: BRIGHT_RED,
    }

    def __init__(self, codes: Optional[dict] = None):
        """
        Initialize AnsiStyler.

        Args:
            codes: Optional overrides of the Style -> escape sequence table
        """
        self.codes = dict(self.STYLE_CODES)
        if codes:
            self.codes.update(codes)

    def apply(self, text: str, style: Optional[Style]) -> str:
        if style is None or not text:
            return text
        code = self.codes.get(style, '')
        if not code:
            return text
        return f'{code}{text}{self.RESET}'

    def terminate(self, line: str) -> str:
        return close_open_styles(line)
