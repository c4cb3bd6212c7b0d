"""
Padding Options
Per-installation configuration: header name and profile, optionally from YAML.

Defaults and range clamping are applied once, when a middleware is
installed, never per request.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from veil.errors import ConfigError
from veil.pool import DEFAULT_CHARSET, DEFAULT_POOL_CAPACITY
from veil.profiles import PROFILE_DEFAULT, PaddingProfile, get_profile, normalize_profile


DEFAULT_HEADER_NAME = "X-Padding"


@dataclass(frozen=True)
class PaddingOptions:
    """
    Configuration for one padding middleware installation.

    Args:
        header_name: Header carrying the padding. Empty means
            ``DEFAULT_HEADER_NAME``.
        profile: Length policy. ``None`` means ``PROFILE_DEFAULT``.
    """
    header_name: str = ""
    profile: Optional[PaddingProfile] = None

    def resolve(self, capacity: int = DEFAULT_POOL_CAPACITY) -> "PaddingOptions":
        """Return a copy with defaults filled in and the profile clamped to ``capacity``."""
        header_name = self.header_name.strip() or DEFAULT_HEADER_NAME
        profile = normalize_profile(self.profile or PROFILE_DEFAULT, capacity)
        return replace(self, header_name=header_name, profile=profile)


def _read_yaml(path: str | Path) -> Dict[str, Any]:
    if not os.path.isfile(path):
        raise ConfigError(f"padding config not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"padding config {path} must be a mapping")
    return raw


def _int_field(raw: Dict[str, Any], key: str, where: str) -> int:
    value = raw.get(key)
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{where}.{key} must be an integer, got {value!r}")
    return value


def profile_from_config(value: Any) -> Optional[PaddingProfile]:
    """
    Build a profile from a config value.

    Accepts ``None``, a preset name, or a mapping with ``min_length`` and
    ``max_length`` (and an optional ``name``).
    """
    if value is None:
        return None
    if isinstance(value, str):
        return get_profile(value)
    if isinstance(value, dict):
        return PaddingProfile(
            min_length=_int_field(value, "min_length", "profile"),
            max_length=_int_field(value, "max_length", "profile"),
            name=str(value.get("name", "custom")),
        )
    raise ConfigError(f"profile must be a preset name or a mapping, got {value!r}")


def load_options(path: str | Path) -> PaddingOptions:
    """
    Load padding options from a YAML file.

    The result is unresolved: pass it to an injector or middleware, which
    resolves it against the pool it uses.
    """
    raw = _read_yaml(path)
    header_name = raw.get("header_name") or ""
    if not isinstance(header_name, str):
        raise ConfigError(f"header_name must be a string, got {header_name!r}")
    return PaddingOptions(
        header_name=header_name,
        profile=profile_from_config(raw.get("profile")),
    )


def load_pool_settings(path: str | Path) -> Tuple[int, str]:
    """Read the optional ``pool`` section of a config file as ``(capacity, charset)``."""
    raw = _read_yaml(path)
    pool = raw.get("pool") or {}
    if not isinstance(pool, dict):
        raise ConfigError("pool section must be a mapping")

    capacity = DEFAULT_POOL_CAPACITY
    if "capacity" in pool:
        capacity = _int_field(pool, "capacity", "pool")
    charset = pool.get("charset", DEFAULT_CHARSET)
    if not isinstance(charset, str):
        raise ConfigError(f"pool.charset must be a string, got {charset!r}")
    return capacity, charset
