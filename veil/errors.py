"""
Errors raised by the padding core.

Per-message failures never reach the HTTP client: the injector logs them
and lets the message go out unpadded. Only pool initialisation is allowed
to fail loudly.
"""


class InvalidRange(ValueError):
    """Raised when a sampling range has its lower bound above the upper."""

    def __init__(self, low: int, high: int):
        self.low = low
        self.high = high
        super().__init__(f"invalid range: min ({low}) is greater than max ({high})")


class EntropyFailure(RuntimeError):
    """The secure random source could not produce a value."""


class ConfigError(ValueError):
    """Malformed padding configuration."""
