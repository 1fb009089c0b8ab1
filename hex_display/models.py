"""
Data models for the rendering engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .styles import Style


class ByteClass(Enum):
    """Display class of a single byte."""
    NULL = 'null'
    PRINTABLE_ASCII = 'printable_ascii'
    CONTROL_ASCII = 'control_ascii'
    HIGH_BYTE = 'high_byte'
    UNICODE_LEAD = 'unicode_lead'
    UNICODE_CONTINUATION = 'unicode_continuation'
    INVALID_SEQUENCE = 'invalid_sequence'
    NUMERIC = 'numeric'


class NumericClass(Enum):
    """Set of ASCII digits highlighted as numeric."""
    OCTAL = 'octal'
    DECIMAL = 'decimal'
    HEXADECIMAL = 'hexadecimal'

    @classmethod
    def parse(cls, name: str) -> 'NumericClass':
        """
        Look up a numeric class by name or short alias.

        Raises:
            ValueError: If the name is not known
        """
        try:
            return NUMERIC_ALIASES[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown numeric class: '{name}'") from None

    def matches(self, value: int) -> bool:
        """Check whether a byte is a digit of this class."""
        if self is NumericClass.OCTAL:
            return 0x30 <= value <= 0x37
        if self is NumericClass.DECIMAL:
            return 0x30 <= value <= 0x39
        return 0x30 <= value <= 0x39 or 0x41 <= value <= 0x46 or 0x61 <= value <= 0x66


NUMERIC_ALIASES = {
    'o': NumericClass.OCTAL,
    'oct': NumericClass.OCTAL,
    'octal': NumericClass.OCTAL,
    'd': NumericClass.DECIMAL,
    'dec': NumericClass.DECIMAL,
    'decimal': NumericClass.DECIMAL,
    'h': NumericClass.HEXADECIMAL,
    'x': NumericClass.HEXADECIMAL,
    'hex': NumericClass.HEXADECIMAL,
    'hexadecimal': NumericClass.HEXADECIMAL,
}


@dataclass(frozen=True)
class Chunk:
    """One row worth of input bytes and its absolute starting offset."""
    offset: int
    data: bytes

    def __len__(self) -> int:
        return len(self.data)

    @property
    def end(self) -> int:
        """Absolute offset just past the last byte of the chunk."""
        return self.offset + len(self.data)


@dataclass(frozen=True)
class GraphemeCell:
    """
    Rendered representation of one grapheme cluster or substituted byte.

    start/end are chunk-relative byte positions; width is the number of
    terminal cells the text occupies.
    """
    text: str
    start: int
    end: int
    width: int
    byte_class: ByteClass

    @property
    def size(self) -> int:
        """Number of source bytes consumed by the cell."""
        return self.end - self.start


@dataclass(frozen=True)
class StyledSpan:
    """A piece of column text with an optional semantic style."""
    text: str
    style: Optional[Style] = None


@dataclass(frozen=True)
class RenderedLine:
    """The three columns of one dump row, still as styled spans."""
    offset: List[StyledSpan] = field(default_factory=list)
    hex_column: List[StyledSpan] = field(default_factory=list)
    text_column: List[StyledSpan] = field(default_factory=list)

    @staticmethod
    def plain(spans: List[StyledSpan]) -> str:
        """Join span texts without styling."""
        return ''.join(span.text for span in spans)
