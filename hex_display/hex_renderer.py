"""
Hex column renderer.
"""

from typing import List, Optional

from .classifier import ByteClassifier, STYLE_TABLE
from .models import ByteClass, StyledSpan


class HexRenderer:
    """
    Formats a row as grouped hex byte pairs with a fixed column width.

    Layout for width=8, group=2:  `00 01  02 03  04 05  06 07`
    """

    BYTE_SEPARATOR = ' '
    GROUP_SEPARATOR = '  '
    PLACEHOLDER = '  '

    def __init__(self, width: int, group: int, uppercase: bool = False,
                 classifier: Optional[ByteClassifier] = None):
        """
        Initialize HexRenderer.

        Args:
            width: Bytes per row
            group: Bytes per group
            uppercase: Use A-F instead of a-f
            classifier: ByteClassifier used when classes are not supplied
        """
        self.width = width
        self.group = group
        self.digit_format = '02X' if uppercase else '02x'
        self.classifier = classifier or ByteClassifier()

    @property
    def column_width(self) -> int:
        """Number of characters in the hex column of every row."""
        return self.byte_column(self.width - 1) + 2

    def byte_column(self, index: int) -> int:
        """Character position of byte `index` within the hex column."""
        return index * 3 + index // self.group

    def separator_before(self, index: int) -> str:
        """Whitespace preceding byte `index`."""
        if index == 0:
            return ''
        return self.GROUP_SEPARATOR if index % self.group == 0 else self.BYTE_SEPARATOR

    def render(self, data: bytes, classes: Optional[List[ByteClass]] = None) -> List[StyledSpan]:
        """
        Render the hex column of a row.

        Args:
            data: Row bytes (at most `width`)
            classes: Byte classes used to style the digits (computed if omitted)

        Returns:
            Spans whose plain text is exactly `column_width` characters
        """
        if classes is None:
            classes = self.classifier.classify(data)

        spans: List[StyledSpan] = []
        for index in range(self.width):
            separator = self.separator_before(index)
            if separator:
                spans.append(StyledSpan(separator))
            if index < len(data):
                spans.append(StyledSpan(format(data[index], self.digit_format), STYLE_TABLE[classes[index]]))
            else:
                spans.append(StyledSpan(self.PLACEHOLDER))
        return spans
