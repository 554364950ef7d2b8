from __future__ import annotations

"""Finder settings resolved from the environment."""


import logging
from dataclasses import dataclass
from functools import lru_cache

from ..exceptions import ConfigurationError
from .runtime import env_bool, env_int, env_str

DEFAULT_PORT = 20017
DEFAULT_PROCESS_PREFIX = "mongo"
DEFAULT_LOG_LEVEL = "WARNING"

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class FinderSettings:
    default_port: int
    process_prefix: str
    log_level: int
    verbose: bool


@lru_cache(maxsize=1)
def get_finder_settings() -> FinderSettings:
    default_port = env_int("MPF_DEFAULT_PORT", or_value=DEFAULT_PORT)
    if not 0 < default_port < 65536:
        raise ConfigurationError.invalid_format("MPF_DEFAULT_PORT", str(default_port), "a TCP port between 1 and 65535")

    process_prefix = env_str("MPF_PROCESS_PREFIX", or_value=DEFAULT_PROCESS_PREFIX)

    level_name = env_str("MPF_LOG_LEVEL", or_value=DEFAULT_LOG_LEVEL).upper()
    if level_name not in _VALID_LOG_LEVELS:
        raise ConfigurationError.invalid_format("MPF_LOG_LEVEL", level_name, f"one of {', '.join(_VALID_LOG_LEVELS)}")

    return FinderSettings(
        default_port=int(default_port),
        process_prefix=process_prefix,
        log_level=getattr(logging, level_name),
        verbose=bool(env_bool("MPF_VERBOSE", or_value=False)),
    )
