"""
Tolerant UTF-8 decoding that keeps every scalar value traceable to its bytes.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class DecodedUnit:
    """One decoded scalar value, or one byte that could not be decoded (char is None)."""
    start: int
    end: int
    char: Optional[str]

    @property
    def valid(self) -> bool:
        return self.char is not None


def sequence_length(lead: int) -> int:
    """
    Length of the UTF-8 sequence announced by a lead byte.

    Args:
        lead: Byte value

    Returns:
        1-4 for a possible sequence start, 0 for bytes that never start one
        (continuation bytes, 0xC0, 0xC1 and 0xF5-0xFF)
    """
    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0


def _decode_sequence(candidate: bytes) -> Optional[str]:
    """Strictly decode a single candidate sequence; None if it is malformed."""
    try:
        return candidate.decode('utf-8')
    except UnicodeDecodeError:
        return None


def decode_tolerant(data: bytes) -> List[DecodedUnit]:
    """
    Decode bytes as UTF-8 without ever failing.

    Malformed input produces one undecodable unit per offending byte, so the
    units always cover `data` contiguously and exactly once. Sequences cut off
    by the end of `data` are malformed; nothing is carried over to the next call.

    Args:
        data: Bytes to decode

    Returns:
        List of DecodedUnit in byte order
    """
    units: List[DecodedUnit] = []
    pos = 0
    total = len(data)

    while pos < total:
        size = sequence_length(data[pos])
        if size and pos + size <= total:
            char = _decode_sequence(data[pos:pos + size])
            if char is not None:
                units.append(DecodedUnit(pos, pos + size, char))
                pos += size
                continue
        units.append(DecodedUnit(pos, pos + 1, None))
        pos += 1

    return units
