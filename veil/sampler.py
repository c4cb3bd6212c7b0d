"""
Length Sampler
Cryptographically secure uniform integers in a closed range.

Used twice per padded message: once to pick the padding length and once
to pick the offset into the random pool.
"""

import os

from veil.errors import EntropyFailure, InvalidRange


class LengthSampler:
    """
    Draws unbiased integers from a secure byte source.

    Values are produced by rejection sampling over the exact span
    ``high - low + 1``: random bits are masked down to the span's bit
    length and redrawn while they fall outside it, so no residue class
    is favoured.

    Args:
        entropy: Callable returning ``n`` random bytes. Defaults to
            ``os.urandom``, which is safe to call from many threads.
    """

    def __init__(self, entropy=None):
        self._entropy = entropy or os.urandom

    def _read(self, n: int) -> bytes:
        try:
            raw = self._entropy(n)
        except Exception as e:
            raise EntropyFailure(f"entropy source failed: {e}") from e
        if len(raw) != n:
            raise EntropyFailure(f"entropy source returned {len(raw)} of {n} bytes")
        return raw

    def uniform_int(self, low: int, high: int) -> int:
        """
        Return an integer in ``[low, high]`` inclusive.

        Raises:
            InvalidRange: if ``low > high``. Bounds are never swapped.
            EntropyFailure: if the entropy source fails.
        """
        if low > high:
            raise InvalidRange(low, high)
        if low == high:
            return low

        span = high - low + 1
        nbits = (span - 1).bit_length()
        nbytes = (nbits + 7) // 8
        mask = (1 << nbits) - 1

        # Acceptance probability is at least 1/2 per draw
        while True:
            value = int.from_bytes(self._read(nbytes), "big") & mask
            if value < span:
                return low + value


_default_sampler = LengthSampler()


def uniform_int(low: int, high: int) -> int:
    """Sample ``[low, high]`` with the process-wide ``os.urandom`` sampler."""
    return _default_sampler.uniform_int(low, high)
