"""
Streaming hex/text dump driver.
"""

from typing import Callable, Iterator, Optional, TextIO

from .chunker import ByteChunker, ByteSource
from .composer import LineComposer
from .config import DumpConfig
from .exceptions import InputReadError, OutputWriteError
from .logging_config import get_logger
from .styles import Styler

logger = get_logger('hex_dump')


class HexDumper:
    """
    Hex/text dumper with optional colors.

    Pulls one chunk at a time from the source, composes its line and writes
    it before the next chunk is read.
    """

    def __init__(self, config: Optional[DumpConfig] = None, styler: Optional[Styler] = None):
        """
        Initialize HexDumper.

        Args:
            config: Run configuration (default: DumpConfig())
            styler: Styler override; by default chosen from config.color
        """
        self.config = config or DumpConfig()
        self.composer = LineComposer(self.config, styler)

    def chunker(self, source: ByteSource) -> ByteChunker:
        """Create a chunker for source honoring width, skip and length."""
        return ByteChunker(source, self.config.width, skip=self.config.skip, length=self.config.length)

    def lines(self, source: ByteSource) -> Iterator[str]:
        """
        Yield dump lines (without newlines) for a byte source.

        Args:
            source: Binary file object or bytes

        Yields:
            One formatted line per chunk
        """
        for chunk in self.chunker(source):
            yield self.composer.format(chunk)

    def dump(self, data: bytes) -> str:
        """
        Create a hex/text dump of in-memory data.

        Args:
            data: Binary data to dump

        Returns:
            Formatted dump, lines joined by newlines
        """
        return '\n'.join(self.lines(data))

    def run(self, source: ByteSource, sink: TextIO,
            should_stop: Optional[Callable[[], bool]] = None) -> int:
        """
        Dump a whole source to a text sink.

        Args:
            source: Binary file object or bytes
            sink: Text stream receiving newline terminated lines
            should_stop: Optional callable checked between chunks; returning
                True ends the run after the last complete line

        Returns:
            Number of lines written

        Raises:
            InputReadError: If the source fails (lines written so far are flushed)
            OutputWriteError: If the sink fails
        """
        chunker = self.chunker(source)
        written = 0

        while not (should_stop and should_stop()):
            try:
                chunk = chunker.next_chunk()
            except InputReadError:
                self._flush_after_error(sink)
                raise
            if chunk is None:
                break

            line = self.composer.format(chunk)
            try:
                sink.write(line + '\n')
            except OSError as e:
                raise OutputWriteError(f"Unable to write line at offset {chunk.offset:#x}") from e
            written += 1
        else:
            logger.debug(f"Stop requested at offset {chunker.offset:#x}")

        try:
            sink.flush()
        except OSError as e:
            raise OutputWriteError("Unable to flush output") from e

        logger.debug(f"Wrote {written} lines, next offset {chunker.offset:#x}")
        return written

    @staticmethod
    def _flush_after_error(sink: TextIO):
        """Flush lines already written before an input error propagates."""
        try:
            sink.flush()
        except OSError as e:
            logger.debug(f"Flush after input error failed: {e}")


def hex_dump(data: bytes, width: int = 16, group: int = 2, use_color: bool = False) -> str:
    """
    Create a hex/text dump of data.

    Shortcut for HexDumper(DumpConfig(...)).dump(data).

    Args:
        data: Binary data to dump
        width: Number of bytes per line (default 16)
        group: Number of bytes per hex group (default 2)
        use_color: Use ANSI colors

    Returns:
        Formatted dump string
    """
    dumper = HexDumper(DumpConfig(width=width, group=group, color=use_color))
    return dumper.dump(data)
