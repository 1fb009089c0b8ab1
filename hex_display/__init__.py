"""
hex_display Package

Renders arbitrary bytes as aligned rows of offset, grouped hex and
width-aware Unicode text, and parses such dumps back into bytes.
"""

from .config import DumpConfig, create_default_config
from .models import ByteClass, Chunk, GraphemeCell, NumericClass, StyledSpan, RenderedLine
from .chunker import ByteChunker
from .decoder import DecodedUnit, decode_tolerant
from .classifier import ByteClassifier, STYLE_TABLE, classify_byte
from .text_renderer import TextRenderer, cluster_width, is_printable_cluster
from .hex_renderer import HexRenderer
from .composer import LineComposer
from .hex_dump import HexDumper, hex_dump
from .reverse import ReverseParser, reverse_dump
from .styles import Style, Styler, PlainStyler, AnsiStyler, strip_styles, close_open_styles
from .exceptions import HexDisplayError, ConfigError, InputReadError, OutputWriteError, ReverseFormatError
from .logging_config import LoggingManager, setup_logging, get_logger

__all__ = [
    # Configuration
    'DumpConfig',
    'create_default_config',
    # Data model
    'ByteClass',
    'NumericClass',
    'Chunk',
    'GraphemeCell',
    'StyledSpan',
    'RenderedLine',
    # Engine components
    'ByteChunker',
    'DecodedUnit',
    'decode_tolerant',
    'ByteClassifier',
    'STYLE_TABLE',
    'classify_byte',
    'TextRenderer',
    'cluster_width',
    'is_printable_cluster',
    'HexRenderer',
    'LineComposer',
    # Hex dump
    'HexDumper',
    'hex_dump',
    # Reverse
    'ReverseParser',
    'reverse_dump',
    # Styles
    'Style',
    'Styler',
    'PlainStyler',
    'AnsiStyler',
    'strip_styles',
    'close_open_styles',
    # Exceptions
    'HexDisplayError',
    'ConfigError',
    'InputReadError',
    'OutputWriteError',
    'ReverseFormatError',
    # Logging
    'LoggingManager',
    'setup_logging',
    'get_logger',
]

__version__ = '0.1.0'
