"""Environment-backed configuration for the finder."""

from ..exceptions import ConfigurationError
from .runtime import env_bool, env_int, env_str
from .settings import DEFAULT_PORT, FinderSettings, get_finder_settings

__all__ = [
    "ConfigurationError",
    "DEFAULT_PORT",
    "FinderSettings",
    "env_bool",
    "env_int",
    "env_str",
    "get_finder_settings",
]
