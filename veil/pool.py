"""
Random Pool
A buffer of random padding characters generated once, sliced per message.

Filling the pool is the only place that pays for entropy per byte.
Afterwards every padding value is a read-only view into the same buffer
at a random offset, so concurrent readers need no lock.
"""

import logging
import string

from veil.errors import ConfigError, EntropyFailure
from veil.sampler import LengthSampler

logger = logging.getLogger(__name__)


# Size of the pool, and the longest padding value that can be produced
DEFAULT_POOL_CAPACITY = 4096

# Every character must be legal inside an HTTP header value
DEFAULT_CHARSET = string.ascii_letters + string.digits

_EMPTY = memoryview(b"")


def validate_charset(charset: str) -> bytes:
    """
    Check a padding charset and return it as bytes.

    Only visible ASCII (0x21-0x7e) is accepted so that a padding value
    never needs quoting or folding in a header.
    """
    if not charset:
        raise ConfigError("padding charset must not be empty")
    try:
        encoded = charset.encode("ascii")
    except UnicodeEncodeError as e:
        raise ConfigError(f"padding charset must be ASCII: {e}") from e
    for byte in encoded:
        if byte < 0x21 or byte > 0x7E:
            raise ConfigError(f"padding charset contains non-visible byte 0x{byte:02x}")
    return encoded


class RandomPool:
    """
    Immutable buffer of ``capacity`` random characters.

    Each byte is drawn independently from ``charset`` with the secure
    sampler. A single-character charset reduces the pool to a constant
    buffer whose only randomness is the slice length.

    Args:
        capacity: Number of bytes in the pool.
        charset: Characters the pool is drawn from.
        sampler: LengthSampler used for filling and for offsets.

    Raises:
        EntropyFailure: if the pool cannot be filled. There is no
            degraded mode, padding must never be predictable.
        ConfigError: on an unusable capacity or charset.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_POOL_CAPACITY,
        charset: str = DEFAULT_CHARSET,
        sampler: LengthSampler = None,
    ):
        if capacity <= 0:
            raise ConfigError(f"pool capacity must be positive, got {capacity}")
        alphabet = validate_charset(charset)

        self.sampler = sampler or LengthSampler()
        self.charset = charset

        last = len(alphabet) - 1
        buf = bytearray(capacity)
        for i in range(capacity):
            buf[i] = alphabet[self.sampler.uniform_int(0, last)]

        self._data = bytes(buf)
        self._view = memoryview(self._data)
        logger.debug("random pool initialised: %d bytes, charset of %d", capacity, len(alphabet))

    @property
    def capacity(self) -> int:
        return len(self._data)

    def slice(self, length: int) -> memoryview:
        """
        Return ``length`` contiguous bytes starting at a random offset.

        Lengths above the capacity are clamped to it; zero or negative
        lengths give an empty view. The view is read-only and shares
        memory with the pool.
        """
        if length <= 0:
            return _EMPTY
        capacity = len(self._data)
        if length > capacity:
            length = capacity

        try:
            start = self.sampler.uniform_int(0, capacity - length)
        except EntropyFailure as e:
            # Keep padding available; the pool content is still random
            logger.warning("padding pool: offset sampling failed, using offset 0: %s", e)
            start = 0
        return self._view[start:start + length]

    def __len__(self) -> int:
        return len(self._data)
