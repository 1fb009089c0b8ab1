"""
Reverse parser: rebuilds the original bytes from dump lines.

Each line is read with a fixed grammar:

    OFFSET ':' ' ' HEX_COLUMN [ '  |' IGNORED ]

OFFSET is one or more hex digits, HEX_COLUMN is exactly as wide as the
forward renderer makes it for the configured width and group, and the text
column after the separator is ignored. Only the hex column is trusted; the
text column is lossy.
"""

import re
from typing import BinaryIO, Iterable, Iterator, Optional, TextIO, Tuple

from .composer import COLUMN_SEPARATOR, OFFSET_SEPARATOR, TEXT_BORDER
from .config import DumpConfig
from .exceptions import InputReadError, OutputWriteError, ReverseFormatError
from .hex_renderer import HexRenderer
from .logging_config import get_logger
from .styles import strip_styles

logger = get_logger('reverse')

OFFSET_PATTERN = re.compile(r'(?P<offset>[0-9A-Fa-f]+):')
HEX_DIGITS = frozenset('0123456789abcdefABCDEF')


class ReverseParser:
    """Parses forward dump lines back into bytes, validating row order."""

    def __init__(self, config: Optional[DumpConfig] = None):
        """
        Initialize ReverseParser.

        Args:
            config: Configuration the dump was produced with (width and group are used)
        """
        self.config = config or DumpConfig()
        self.width = self.config.width
        self.layout = HexRenderer(self.config.width, self.config.group)
        self.reset()

    def reset(self):
        """Forget previously parsed rows."""
        self._expected_offset: Optional[int] = None
        self._previous_short = False
        self.start_offset: Optional[int] = None

    def parse_line(self, line: str, line_number: int) -> Optional[Tuple[int, bytes]]:
        """
        Parse one dump line.

        Args:
            line: Line text, with or without color codes and newline
            line_number: 1-based line number used in error messages

        Returns:
            (offset, bytes) for a row, or None for a blank line

        Raises:
            ReverseFormatError: If the line does not match the dump grammar or
                its offset does not follow the previous row
        """
        text = strip_styles(line).rstrip('\r\n')
        if not text.strip():
            return None

        match = OFFSET_PATTERN.match(text)
        if match is None:
            raise ReverseFormatError("expected a hex offset followed by ':'", line_number, 1)

        pos = match.end()
        separator = OFFSET_SEPARATOR[1:]
        if text[pos:pos + len(separator)] not in (separator, ''):
            raise ReverseFormatError("expected a space after the offset", line_number, pos + 1)
        pos += len(separator)

        column_width = self.layout.column_width
        region = text[pos:pos + column_width]
        rest = text[pos + column_width:]
        if rest.strip() and not rest.startswith(COLUMN_SEPARATOR + TEXT_BORDER):
            raise ReverseFormatError(
                "hex column is wider than the configured width and group allow",
                line_number, pos + column_width + 1
            )

        data = self._parse_hex_column(region, line_number, pos)
        if not data:
            raise ReverseFormatError("row holds no bytes", line_number, pos + 1)

        offset = int(match.group('offset'), 16)
        self._check_offset(offset, line_number)
        self._expected_offset = offset + self.width
        self._previous_short = len(data) < self.width
        if self.start_offset is None:
            self.start_offset = offset

        return offset, data

    def _parse_hex_column(self, region: str, line_number: int, base: int) -> bytes:
        """Read byte slots of the hex column by position."""
        values = bytearray()
        padding_seen = False

        for index in range(self.width):
            column = self.layout.byte_column(index)
            separator = self.layout.separator_before(index)
            for i in range(column - len(separator), column):
                if i < len(region) and region[i] != ' ':
                    raise ReverseFormatError(
                        f"unexpected {region[i]!r} between hex bytes", line_number, base + i + 1
                    )

            pair = region[column:column + 2]
            for i, char in enumerate(pair):
                if char != ' ' and char not in HEX_DIGITS:
                    raise ReverseFormatError(
                        f"invalid hex digit {char!r}", line_number, base + column + i + 1
                    )

            if not pair.strip():
                padding_seen = True
                continue
            if padding_seen:
                raise ReverseFormatError("byte after padding", line_number, base + column + 1)
            if len(pair) < 2 or ' ' in pair:
                raise ReverseFormatError("incomplete hex byte", line_number, base + column + 1)
            values.append(int(pair, 16))

        return bytes(values)

    def _check_offset(self, offset: int, line_number: int):
        """Ensure rows follow each other without gaps or overlaps."""
        expected = self._expected_offset
        if expected is None:
            return
        if offset < expected:
            raise ReverseFormatError(
                f"offset {offset:#x} is out of order or overlaps the previous row (expected {expected:#x})",
                line_number, 1
            )
        if offset > expected:
            raise ReverseFormatError(
                f"offset {offset:#x} leaves a gap after the previous row (expected {expected:#x})",
                line_number, 1
            )
        if self._previous_short:
            raise ReverseFormatError(
                "row follows a short row; only the last row may hold fewer than "
                f"{self.width} bytes", line_number, 1
            )

    def iter_bytes(self, lines: Iterable[str]) -> Iterator[bytes]:
        """
        Yield the bytes of every row in order.

        Args:
            lines: Dump lines

        Yields:
            Bytes of each row
        """
        self.reset()
        for line_number, line in enumerate(lines, 1):
            row = self.parse_line(line, line_number)
            if row is not None:
                yield row[1]

    def restore(self, source: TextIO, sink: BinaryIO) -> int:
        """
        Rebuild a byte stream from a text dump.

        Args:
            source: Text stream of dump lines
            sink: Binary stream receiving the bytes

        Returns:
            Number of bytes written

        Raises:
            ReverseFormatError: On malformed input
            InputReadError: If reading the dump fails
            OutputWriteError: If writing the bytes fails
        """
        written = 0
        for data in self.iter_bytes(_read_lines(source)):
            try:
                sink.write(data)
            except OSError as e:
                raise OutputWriteError(f"Unable to write restored bytes after {written} bytes") from e
            written += len(data)

        try:
            sink.flush()
        except OSError as e:
            raise OutputWriteError("Unable to flush restored bytes") from e

        logger.debug(f"Restored {written} bytes starting at offset {self.start_offset or 0:#x}")
        return written


def _read_lines(source: TextIO) -> Iterator[str]:
    """Iterate over source lines, turning I/O failures into InputReadError."""
    line_number = 0
    while True:
        try:
            line = source.readline()
        except OSError as e:
            raise InputReadError(f"Unable to read dump after line {line_number}") from e
        if not line:
            return
        line_number += 1
        yield line


def reverse_dump(text: str, width: int = 16, group: int = 2) -> bytes:
    """
    Rebuild bytes from a dump string.

    Args:
        text: Dump produced by hex_dump() with the same width and group
        width: Bytes per row
        group: Bytes per hex group

    Returns:
        Original bytes
    """
    parser = ReverseParser(DumpConfig(width=width, group=group))
    return b''.join(parser.iter_bytes(text.splitlines()))
