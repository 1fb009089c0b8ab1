import io

import pytest

from hex_display import DumpConfig

CONTROL_PICTURES = ''.join(chr(0x2400 + value) for value in range(0x20))


class NonSeekableReader(io.RawIOBase):
    """Byte source that cannot seek and hands out at most `step` bytes per read."""

    def __init__(self, data: bytes, step: int = 3):
        self._buffer = io.BytesIO(data)
        self.step = step

    def readable(self):
        return True

    def seekable(self):
        return False

    def read(self, size=-1):
        if size is None or size < 0:
            size = self.step
        return self._buffer.read(min(size, self.step))


class FailingReader(io.RawIOBase):
    """Byte source that returns `data` once and then fails."""

    def __init__(self, data: bytes):
        self._data = data

    def readable(self):
        return True

    def read(self, size=-1):
        if self._data:
            data, self._data = self._data[:size], self._data[size:]
            return data
        raise OSError(5, "Input/output error")


class BrokenPipeSink(io.StringIO):
    """Text sink whose writes fail like a closed pipe."""

    def write(self, text):
        raise BrokenPipeError(32, "Broken pipe")


@pytest.fixture
def config():
    return DumpConfig()


@pytest.fixture
def scenario_bytes():
    """Sixteen control bytes followed by 'AB'."""
    return bytes(range(16)) + b'AB'


@pytest.fixture
def mixed_bytes():
    """Printable ASCII, controls, UTF-8 of several widths and invalid bytes."""
    return (
        b'Hello, \x00\x01\x7f world! '
        + 'caf\u00e9 e\u0301 \u4e2d\u6587 \U0001F600 \U0001F469\u200d\U0001F680'.encode('utf-8')
        + b'\x80\xc0\xc1\xff\xe4\xb8 \xed\xa0\x80 tail'
    )


@pytest.fixture
def random_bytes():
    import random
    rng = random.Random(20261019)
    return bytes(rng.randrange(256) for _ in range(1000))
