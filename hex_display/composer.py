"""
Line composer: assembles offset, hex column and text column into one row.
"""

from itertools import groupby
from typing import List, Optional

from .classifier import ByteClassifier
from .config import DumpConfig
from .decoder import decode_tolerant
from .hex_renderer import HexRenderer
from .models import Chunk, RenderedLine, StyledSpan
from .styles import AnsiStyler, PlainStyler, Style, Styler, close_open_styles
from .text_renderer import TextRenderer

OFFSET_DIGITS = 8
OFFSET_SEPARATOR = ': '
COLUMN_SEPARATOR = '  '
TEXT_BORDER = '|'


class LineComposer:
    """Builds one dump line per chunk."""

    def __init__(self, config: DumpConfig, styler: Optional[Styler] = None,
                 classifier: Optional[ByteClassifier] = None,
                 text_renderer: Optional[TextRenderer] = None,
                 hex_renderer: Optional[HexRenderer] = None):
        """
        Initialize LineComposer.

        Args:
            config: Run configuration
            styler: Styler for semantic styles (default: ANSI when config.color, plain otherwise)
            classifier: ByteClassifier shared by both column renderers (default: built from config.numeric)
            text_renderer: Text column renderer (default: built from config)
            hex_renderer: Hex column renderer (default: built from config)
        """
        self.config = config
        if styler is None:
            styler = AnsiStyler() if config.color else PlainStyler()
        self.styler = styler
        self.classifier = classifier or ByteClassifier(config.numeric)
        self.text_renderer = text_renderer or TextRenderer(config.width, classifier=self.classifier)
        self.hex_renderer = hex_renderer or HexRenderer(
            config.width, config.group, uppercase=config.uppercase, classifier=self.classifier
        )
        self.offset_format = f"0{OFFSET_DIGITS}{'X' if config.uppercase else 'x'}"

    def format_offset(self, offset: int) -> str:
        """Zero padded hex offset."""
        return format(offset, self.offset_format)

    def compose(self, chunk: Chunk) -> RenderedLine:
        """
        Render the three columns of a chunk.

        Args:
            chunk: Row to render

        Returns:
            RenderedLine with unstyled-text spans for each column
        """
        units = decode_tolerant(chunk.data)
        classes = self.classifier.classify(chunk.data, units)

        return RenderedLine(
            offset=[StyledSpan(self.format_offset(chunk.offset), Style.OFFSET)],
            hex_column=self.hex_renderer.render(chunk.data, classes),
            text_column=self.text_renderer.render(chunk, classes, units),
        )

    def format(self, chunk: Chunk) -> str:
        """
        Render a chunk as a complete line of text without the newline.

        Every style opened on the line is closed before it ends.
        """
        rendered = self.compose(chunk)
        line = ''.join([
            self._apply(rendered.offset),
            OFFSET_SEPARATOR,
            self._apply(rendered.hex_column),
            COLUMN_SEPARATOR,
            TEXT_BORDER,
            self._apply(rendered.text_column),
            TEXT_BORDER,
        ])
        return close_open_styles(self.styler.terminate(line))

    def _apply(self, spans: List[StyledSpan]) -> str:
        """Style spans, merging neighbours that share a style."""
        return ''.join(
            self.styler.apply(''.join(span.text for span in group), style)
            for style, group in groupby(spans, key=lambda span: span.style)
        )
