"""
Custom exceptions for the hex_display package.
"""

from typing import Optional


class HexDisplayError(Exception):
    """Base exception for all hex_display errors."""
    pass


class ConfigError(HexDisplayError):
    """Exception raised for configuration errors."""
    pass


class InputReadError(HexDisplayError):
    """Exception raised when the byte source cannot be read or seeked."""
    pass


class OutputWriteError(HexDisplayError):
    """Exception raised when a dump line cannot be written to the sink."""
    pass


class ReverseFormatError(HexDisplayError):
    """Exception raised for malformed input to the reverse parser."""

    def __init__(self, message: str, line_number: int, column: Optional[int] = None):
        """
        Initialize ReverseFormatError.

        Args:
            message: Description of the problem
            line_number: 1-based line number in the dump
            column: 1-based column of the offending character, if known
        """
        self.message = message
        self.line_number = line_number
        self.column = column
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.column is None:
            return f"line {self.line_number}: {self.message}"
        return f"line {self.line_number}, column {self.column}: {self.message}"
