from __future__ import annotations

"""Runtime helpers for working with environment-backed configuration."""


import os

from ..exceptions import ConfigurationError

_TRUE_VALUES = {"1", "true", "t", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "f", "no", "n", "off"}


def env_str(name: str, or_value: str | None = None) -> str | None:
    """Fetch an environment variable as a stripped, non-blank string."""

    value = os.getenv(name)
    if value is None or value.strip() == "":
        return or_value
    return value.strip()


def env_int(name: str, or_value: int | None = None) -> int | None:
    """Fetch an environment variable and coerce it to ``int``."""

    raw = env_str(name)
    if raw is None:
        return or_value
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Environment variable {name!r} must be an integer (got {raw!r})") from exc


def env_bool(name: str, or_value: bool | None = None) -> bool | None:
    """Fetch an environment variable and coerce it to ``bool``."""

    raw = env_str(name)
    if raw is None:
        return or_value

    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Environment variable {name!r} must be a boolean (allowed: {_TRUE_VALUES | _FALSE_VALUES}, got {raw!r})")
