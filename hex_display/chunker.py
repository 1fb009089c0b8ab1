"""
Pull-based byte chunker: turns a byte source into row sized Chunks.
"""

import io
import os
from typing import BinaryIO, Iterator, Optional, Union

from .exceptions import InputReadError
from .logging_config import get_logger
from .models import Chunk

logger = get_logger('chunker')

ByteSource = Union[BinaryIO, bytes, bytearray, memoryview]


class ByteChunker:
    """
    Cursor over a byte source producing one Chunk per call.

    Offsets start at `skip` and grow by the size of every produced chunk.
    Reading stops at EOF or once `length` bytes have been produced.
    """

    DISCARD_BLOCK_SIZE = 64 * 1024

    def __init__(self, source: ByteSource, width: int, skip: int = 0, length: Optional[int] = None):
        """
        Initialize ByteChunker.

        Args:
            source: Binary file object, or a bytes-like buffer
            width: Maximum number of bytes per chunk
            skip: Number of leading bytes to discard
            length: Maximum number of bytes to produce (None = until EOF)
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))

        self.source = source
        self.width = width
        self.skip = skip
        self.length = length

        self._offset = skip
        self._remaining = length
        self._skipped = skip == 0
        self._exhausted = False

    @property
    def offset(self) -> int:
        """Absolute offset of the next chunk."""
        return self._offset

    def __iter__(self) -> Iterator[Chunk]:
        while True:
            chunk = self.next_chunk()
            if chunk is None:
                return
            yield chunk

    def next_chunk(self) -> Optional[Chunk]:
        """
        Produce the next chunk.

        Returns:
            The next Chunk, or None once the source is exhausted or the
            length limit is reached

        Raises:
            InputReadError: If reading or seeking the source fails
        """
        if self._exhausted:
            return None

        if not self._skipped:
            self._skip_leading()
            self._skipped = True
            if self._exhausted:
                return None

        want = self.width
        if self._remaining is not None:
            want = min(want, self._remaining)
        if want == 0:
            self._exhausted = True
            return None

        data = self._read_exactly(want)
        if not data:
            self._exhausted = True
            return None
        if len(data) < want:
            # Short read means EOF
            self._exhausted = True

        chunk = Chunk(offset=self._offset, data=data)
        self._offset += len(data)
        if self._remaining is not None:
            self._remaining -= len(data)
        return chunk

    def _read_exactly(self, size: int) -> bytes:
        """Read up to size bytes, retrying short reads until EOF."""
        parts = []
        missing = size
        while missing > 0:
            try:
                data = self.source.read(missing)
            except OSError as e:
                raise InputReadError(f"Unable to read input at offset {self._offset + size - missing}") from e
            if not data:
                break
            parts.append(data)
            missing -= len(data)
        return b''.join(parts)

    def _skip_leading(self):
        """Discard the first `skip` bytes, seeking when the source allows it."""
        try:
            seekable = self.source.seekable()
        except (AttributeError, OSError, ValueError):
            seekable = False

        if seekable:
            try:
                self.source.seek(self.skip, os.SEEK_CUR)
            except OSError as e:
                raise InputReadError(f"Unable to seek input to offset {self.skip}") from e
            logger.debug(f"Skipped {self.skip} bytes by seeking")
            return

        left = self.skip
        while left > 0:
            try:
                data = self.source.read(min(left, self.DISCARD_BLOCK_SIZE))
            except OSError as e:
                raise InputReadError(f"Unable to read input while skipping to offset {self.skip}") from e
            if not data:
                self._exhausted = True
                break
            left -= len(data)
        logger.debug(f"Skipped {self.skip - left} bytes by reading")
