import io

import pytest

from linerate.source.reader import StreamSource

SECOND = 1_000_000_000


@pytest.fixture
def source():
    def make(data: bytes) -> StreamSource:
        return StreamSource(io.BytesIO(data))
    return make


@pytest.fixture
def clock():
    """Synthetic monotonic clock returning the given readings in seconds, in order."""
    def make(*seconds: float):
        readings = iter(int(s * SECOND) for s in seconds)
        return lambda: next(readings)
    return make
