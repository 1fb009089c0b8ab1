"""
Width-aware text column renderer.

Decodes a row as UTF-8 where possible, segments the text into extended
grapheme clusters and measures every cluster in terminal cells. Bytes that
cannot be shown as text are replaced by single-cell substitution glyphs, so
each cell can always be traced back to the exact bytes it came from.
"""

import unicodedata
from typing import Dict, List, Optional, Union

import regex
from wcwidth import wcswidth, wcwidth

from .classifier import ByteClassifier, STYLE_TABLE
from .decoder import DecodedUnit, decode_tolerant
from .models import ByteClass, Chunk, GraphemeCell, StyledSpan

GRAPHEME_PATTERN = regex.compile(r'\X')

CONTROL_PICTURES_BASE = 0x2400
DELETE_PICTURE = '\u2421'
EMOJI_PRESENTATION = '\ufe0f'
ZERO_WIDTH_JOINER = '\u200d'
REGIONAL_INDICATORS = range(0x1F1E6, 0x1F200)
SKIN_TONE_MODIFIERS = range(0x1F3FB, 0x1F400)
NONPRINTABLE_GLYPH = '.'
FILLER = ' '

# Categories that must never reach the terminal as-is
NONPRINTABLE_CATEGORIES = {'Cc', 'Zl', 'Zp', 'Cs'}

# Bidirectional formatting controls reorder whatever follows them on the line
BIDI_CONTROLS = frozenset('\u061c\u200e\u200f\u202a\u202b\u202c\u202d\u202e\u2066\u2067\u2068\u2069')

DEFAULT_SUBSTITUTIONS: Dict[ByteClass, str] = {
    ByteClass.HIGH_BYTE: '\u00b7',
    ByteClass.INVALID_SEQUENCE: '\ufffd',
}


def is_emoji_sequence(cluster: str) -> bool:
    """Check whether a cluster is a multi-codepoint emoji drawn as a single glyph."""
    if ZERO_WIDTH_JOINER in cluster:
        return True
    if len(cluster) > 1 and ord(cluster[0]) in REGIONAL_INDICATORS:
        return True
    return any(ord(char) in SKIN_TONE_MODIFIERS for char in cluster[1:])


def cluster_width(cluster: str) -> int:
    """
    Display width of a grapheme cluster in terminal cells.

    Every codepoint of the cluster is measured, so prepended marks and
    spacing marks count as well as the base character. An emoji
    presentation selector widens a narrow base to two cells, and emoji
    sequences (ZWJ, flags, skin tones) are drawn as one glyph of at most
    two cells.

    Args:
        cluster: One extended grapheme cluster

    Returns:
        Number of cells, never negative
    """
    if not cluster:
        return 0
    width = wcswidth(cluster)
    if width < 0:
        width = max(wcwidth(cluster[0]), 0)
    if width == 1 and EMOJI_PRESENTATION in cluster:
        width = 2
    if is_emoji_sequence(cluster):
        width = min(width, 2)
    return width


def is_printable_cluster(cluster: str) -> bool:
    """Check whether a cluster can be written to a terminal line verbatim."""
    if unicodedata.category(cluster[0]) in NONPRINTABLE_CATEGORIES:
        return False
    return not any(char in BIDI_CONTROLS for char in cluster)


class TextRenderer:
    """Renders the text column of a row into exactly `width` display cells."""

    def __init__(self, width: int, substitutions: Optional[Dict[ByteClass, str]] = None,
                 classifier: Optional[ByteClassifier] = None):
        """
        Initialize TextRenderer.

        Args:
            width: Row width in bytes, which is also the column width in cells
            substitutions: Glyph overrides per ByteClass. NULL and CONTROL_ASCII
                default to Unicode control pictures
            classifier: ByteClassifier used when classes are not supplied
        """
        self.width = width
        self.substitutions = dict(DEFAULT_SUBSTITUTIONS)
        if substitutions:
            self.substitutions.update(substitutions)
        for byte_class, glyph in self.substitutions.items():
            if wcswidth(glyph) != 1:
                raise ValueError(f"Substitution glyph for {byte_class.name} must be one cell wide: {glyph!r}")
        self.classifier = classifier or ByteClassifier()

    def substitute(self, value: int, byte_class: ByteClass) -> str:
        """Single-cell glyph shown for a byte that is not rendered as text."""
        glyph = self.substitutions.get(byte_class)
        if glyph is not None:
            return glyph
        if byte_class in (ByteClass.NULL, ByteClass.CONTROL_ASCII):
            return DELETE_PICTURE if value == 0x7F else chr(CONTROL_PICTURES_BASE + value)
        return NONPRINTABLE_GLYPH

    def cells(self, chunk: Union[Chunk, bytes], classes: Optional[List[ByteClass]] = None,
              units: Optional[List[DecodedUnit]] = None) -> List[GraphemeCell]:
        """
        Split a row into grapheme cells.

        Args:
            chunk: Row to render
            classes: Byte classes of the row (computed if omitted)
            units: decode_tolerant() result for the row (computed if omitted)

        Returns:
            Cells covering every byte of the row exactly once, in order
        """
        data = chunk.data if isinstance(chunk, Chunk) else bytes(chunk)
        if units is None:
            units = decode_tolerant(data)
        if classes is None:
            classes = self.classifier.classify(data, units)

        cells: List[GraphemeCell] = []
        run: List[DecodedUnit] = []
        for unit in units:
            if unit.valid and classes[unit.start] not in (ByteClass.NULL, ByteClass.CONTROL_ASCII):
                run.append(unit)
                continue
            self._flush_run(run, classes, cells)
            run = []
            byte_class = classes[unit.start]
            cells.append(GraphemeCell(
                text=self.substitute(data[unit.start], byte_class),
                start=unit.start,
                end=unit.end,
                width=1,
                byte_class=byte_class,
            ))
        self._flush_run(run, classes, cells)

        return cells

    @staticmethod
    def _flush_run(run: List[DecodedUnit], classes: List[ByteClass], cells: List[GraphemeCell]):
        """Segment a run of decoded text into grapheme cells."""
        if not run:
            return

        text = ''.join(unit.char for unit in run)
        pos = run[0].start
        for cluster in GRAPHEME_PATTERN.findall(text):
            size = len(cluster.encode('utf-8'))
            if is_printable_cluster(cluster):
                glyph, width = cluster, cluster_width(cluster)
            else:
                glyph, width = NONPRINTABLE_GLYPH, 1
            cells.append(GraphemeCell(
                text=glyph,
                start=pos,
                end=pos + size,
                width=width,
                byte_class=classes[pos],
            ))
            pos += size

    def render(self, chunk: Union[Chunk, bytes], classes: Optional[List[ByteClass]] = None,
               units: Optional[List[DecodedUnit]] = None) -> List[StyledSpan]:
        """
        Render the text column of a row.

        Args:
            chunk: Row to render
            classes: Byte classes of the row (computed if omitted)
            units: decode_tolerant() result for the row (computed if omitted)

        Returns:
            Styled glyph spans followed by unstyled filler, `width` cells in total
        """
        cells = self.cells(chunk, classes, units)
        spans = [StyledSpan(cell.text, STYLE_TABLE[cell.byte_class]) for cell in cells]

        used = sum(cell.width for cell in cells)
        if used < self.width:
            spans.append(StyledSpan(FILLER * (self.width - used)))
        return spans
