"""
Padding Injector
Computes a padding value and attaches it to a message's headers.

Padding is best effort. A failed random draw is logged and the message
goes out without padding; nothing here ever blocks or fails delivery.
"""

import logging
from typing import MutableMapping, Optional

from veil.errors import EntropyFailure
from veil.options import PaddingOptions
from veil.pool import RandomPool

logger = logging.getLogger(__name__)


class PaddingInjector:
    """
    Sets one randomly sized padding header per call.

    The options are resolved once against the pool's capacity. The pool
    is shared read-only, so one injector may serve any number of threads.

    Args:
        options: Header name and profile. Defaults are filled in.
        pool: Source of padding bytes. A new pool is filled when omitted,
            which raises ``EntropyFailure`` if entropy is unavailable.
    """

    def __init__(self, options: PaddingOptions = None, pool: RandomPool = None):
        self.pool = pool or RandomPool()
        self.options = (options or PaddingOptions()).resolve(self.pool.capacity)

    @property
    def header_name(self) -> str:
        return self.options.header_name

    def padding_value(self) -> Optional[str]:
        """
        Produce a padding header value, or ``None`` for no padding.

        Zero-length padding counts as no padding, so a ``{0, 0}`` profile
        never sets the header.
        """
        profile = self.options.profile
        try:
            length = self.pool.sampler.uniform_int(profile.min_length, profile.max_length)
        except EntropyFailure as e:
            logger.error("padding: failed to generate random padding length: %s", e)
            return None
        if length <= 0:
            return None
        return self.pool.slice(length).tobytes().decode("ascii")

    def pad_headers(self, headers: MutableMapping[str, str]) -> bool:
        """
        Set the padding header on ``headers``.

        Returns:
            True if a header was set.
        """
        value = self.padding_value()
        if value is None:
            return False
        headers[self.options.header_name] = value
        return True
