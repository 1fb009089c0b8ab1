"""
Byte classification and the fixed class -> style table.
"""

from typing import Dict, List, Optional

from .decoder import DecodedUnit, decode_tolerant, sequence_length
from .models import ByteClass, NumericClass
from .styles import Style

STYLE_TABLE: Dict[ByteClass, Style] = {
    ByteClass.NULL: Style.DIM,
    ByteClass.PRINTABLE_ASCII: Style.PRINTABLE,
    ByteClass.CONTROL_ASCII: Style.CONTROL,
    ByteClass.HIGH_BYTE: Style.HIGH,
    ByteClass.UNICODE_LEAD: Style.UNICODE,
    ByteClass.UNICODE_CONTINUATION: Style.UNICODE,
    ByteClass.INVALID_SEQUENCE: Style.ERROR,
    ByteClass.NUMERIC: Style.NUMERIC,
}

_missing = set(ByteClass) - set(STYLE_TABLE)
if _missing:
    raise RuntimeError(f"STYLE_TABLE has no style for: {', '.join(sorted(c.name for c in _missing))}")


def classify_byte(value: int) -> ByteClass:
    """
    Tentative class of a byte taken on its own.

    Bytes >= 0x80 are always HIGH_BYTE here; ByteClassifier.classify() refines
    them using the surrounding bytes.
    """
    if value == 0x00:
        return ByteClass.NULL
    if 0x20 <= value <= 0x7E:
        return ByteClass.PRINTABLE_ASCII
    if value < 0x20 or value == 0x7F:
        return ByteClass.CONTROL_ASCII
    return ByteClass.HIGH_BYTE


class ByteClassifier:
    """
    Assigns a ByteClass to every byte of a row.

    With a numeric class set, printable ASCII digits of that class are
    reported as NUMERIC instead of PRINTABLE_ASCII.
    """

    def __init__(self, numeric: Optional[NumericClass] = None):
        self.numeric = numeric

    @staticmethod
    def style_for(byte_class: ByteClass) -> Style:
        """Semantic style used for a byte class."""
        return STYLE_TABLE[byte_class]

    def classify(self, data: bytes, units: Optional[List[DecodedUnit]] = None) -> List[ByteClass]:
        """
        Classify every byte of a row.

        Args:
            data: Row bytes
            units: Result of decode_tolerant(data), if the caller already has it

        Returns:
            One ByteClass per byte
        """
        if units is None:
            units = decode_tolerant(data)

        classes: List[ByteClass] = []
        for unit in units:
            lead = data[unit.start]
            if unit.valid and lead >= 0x80:
                classes.append(ByteClass.UNICODE_LEAD)
                classes.extend([ByteClass.UNICODE_CONTINUATION] * (unit.end - unit.start - 1))
            elif unit.valid and self.numeric is not None and self.numeric.matches(lead):
                classes.append(ByteClass.NUMERIC)
            elif unit.valid:
                classes.append(classify_byte(lead))
            elif 0x80 <= lead <= 0xBF or sequence_length(lead) > 1:
                # Stray continuation byte, or lead byte of a broken sequence
                classes.append(ByteClass.INVALID_SEQUENCE)
            else:
                classes.append(ByteClass.HIGH_BYTE)
        return classes
