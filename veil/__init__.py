"""
Veil — Randomized Header Padding
Traffic-shaping middleware that hides payload sizes behind a random header.

Encryption hides content but not length. Veil appends a header of random
length to HTTP requests and responses so that the encrypted size of a
message says less about what it carries.

Pieces:
1. RandomPool — random padding characters, generated once, sliced per message
2. LengthSampler — unbiased secure integers for lengths and offsets
3. PaddingInjector — sets one padding header on a message
4. PaddingResponseWriter — adds the header exactly once before the body

Usage:
    from veil import PaddingOptions, PROFILE_SHORT
    from veil.adapters import PaddingMiddleware
    app = PaddingMiddleware(app, PaddingOptions(profile=PROFILE_SHORT))
"""

from veil.errors import ConfigError, EntropyFailure, InvalidRange
from veil.sampler import LengthSampler, uniform_int
from veil.pool import RandomPool, DEFAULT_POOL_CAPACITY, DEFAULT_CHARSET
from veil.profiles import (
    PaddingProfile,
    PROFILE_DEFAULT,
    PROFILE_SHORT,
    PROFILE_LONG,
    PRESETS,
    POOL_CAPACITY,
    get_profile,
    normalize_profile,
)
from veil.options import PaddingOptions, DEFAULT_HEADER_NAME, load_options, load_pool_settings
from veil.injector import PaddingInjector
from veil.writer import ResponseWriter, PaddingResponseWriter

__version__ = "0.1.0"
__all__ = [
    "ConfigError",
    "EntropyFailure",
    "InvalidRange",
    "LengthSampler",
    "uniform_int",
    "RandomPool",
    "DEFAULT_POOL_CAPACITY",
    "DEFAULT_CHARSET",
    "PaddingProfile",
    "PROFILE_DEFAULT",
    "PROFILE_SHORT",
    "PROFILE_LONG",
    "PRESETS",
    "POOL_CAPACITY",
    "get_profile",
    "normalize_profile",
    "PaddingOptions",
    "DEFAULT_HEADER_NAME",
    "load_options",
    "load_pool_settings",
    "PaddingInjector",
    "ResponseWriter",
    "PaddingResponseWriter",
]
