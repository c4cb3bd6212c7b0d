"""
Padding Profiles
Named (min, max) length policies modelling different response shapes.

An observer watching encrypted sizes sees the real payload plus a header
whose length is uniform in the profile's range.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from veil.errors import ConfigError
from veil.pool import DEFAULT_POOL_CAPACITY

logger = logging.getLogger(__name__)

# Upper bound meaning "as long as the pool allows"
POOL_CAPACITY = None


@dataclass(frozen=True)
class PaddingProfile:
    """
    A padding length range in bytes, both bounds inclusive.

    A ``max_length`` of ``POOL_CAPACITY`` stands for the capacity of
    whichever pool the profile is resolved against.
    """
    min_length: int
    max_length: Optional[int]
    name: str = "custom"


# General purpose, moderate overhead for most web and API responses
PROFILE_DEFAULT = PaddingProfile(min_length=96, max_length=1024, name="default")

# Small status checks and API replies where padding should not dominate
PROFILE_SHORT = PaddingProfile(min_length=32, max_length=256, name="short")

# Content-heavy pages, strongest obfuscation
PROFILE_LONG = PaddingProfile(min_length=1024, max_length=POOL_CAPACITY, name="long")

PRESETS = {
    profile.name: profile
    for profile in (PROFILE_DEFAULT, PROFILE_SHORT, PROFILE_LONG)
}


def get_profile(name: str) -> PaddingProfile:
    """Look up a preset by name (case-insensitive)."""
    try:
        return PRESETS[name.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(PRESETS))
        raise ConfigError(f"unknown padding profile {name!r} (known: {known})") from None


def normalize_profile(profile: PaddingProfile, capacity: int = DEFAULT_POOL_CAPACITY) -> PaddingProfile:
    """
    Clamp a profile into ``0 <= min <= max <= capacity``.

    Misconfiguration is corrected rather than rejected: max is capped to
    the pool capacity, min is floored at zero and then lowered to max if
    it still exceeds it. Each correction logs a warning. A
    ``POOL_CAPACITY`` max silently becomes ``capacity``. Returns a new
    profile, the argument is left untouched.
    """
    min_length = profile.min_length
    max_length = profile.max_length

    if max_length is POOL_CAPACITY:
        max_length = capacity

    if max_length > capacity:
        logger.warning(
            "padding profile %r: max_length (%d) exceeds pool capacity (%d), capping",
            profile.name, max_length, capacity,
        )
        max_length = capacity
    if max_length < 0:
        logger.warning("padding profile %r: max_length (%d) is negative, using 0", profile.name, max_length)
        max_length = 0
    if min_length < 0:
        logger.warning("padding profile %r: min_length (%d) is negative, using 0", profile.name, min_length)
        min_length = 0
    if min_length > max_length:
        logger.warning(
            "padding profile %r: min_length (%d) is greater than max_length (%d), adjusting to be equal",
            profile.name, min_length, max_length,
        )
        min_length = max_length

    if (min_length, max_length) == (profile.min_length, profile.max_length):
        return profile
    return replace(profile, min_length=min_length, max_length=max_length)
