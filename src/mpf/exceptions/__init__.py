"""Exception classes for the process finder.

Every fatal condition raised by the finder derives from ``ApplicationError``
so the CLI can report it with a single handler.

Exception classes support two patterns:
1. No-argument raise: raise UsageError()
2. Contextual attributes: err = ProcessEnumerationError(platform="darwin"); raise err
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all finder errors.

    Supports keyword arguments that are stored as attributes for debugging.
    """

    exit_code = 2

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = self.__class__.__doc__ or "Application error occurred"
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class ConfigurationError(ApplicationError):
    """Configuration is invalid or missing."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Configuration is invalid or missing"
        super().__init__(message, **kwargs)

    @classmethod
    def invalid_format(cls, param_name: str, received_value: str, expected_format: str = "") -> "ConfigurationError":
        """Create error for invalid format."""
        msg = f"{param_name} has invalid format (received {received_value!r})"
        if expected_format:
            msg += f". Expected {expected_format}"
        return cls(msg, param_name=param_name, value=received_value)

    @classmethod
    def bad_port(cls, pid: int, value: str) -> "ConfigurationError":
        """Create error for a --port value that is not an integer."""
        return cls(f"Bad port number {value!r} on command line of process {pid}", pid=pid, value=value)


class UsageError(ApplicationError):
    """Command line options conflict."""

    exit_code = 1

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Command line options conflict"
        super().__init__(message, **kwargs)


class ProcessEnumerationError(ApplicationError):
    """The operating system process table could not be read."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Unable to enumerate running processes"
        super().__init__(message, **kwargs)


class UnsupportedPlatformError(ApplicationError):
    """Process argument inspection is not available on this platform."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Process argument inspection is not available on this platform"
        super().__init__(message, **kwargs)


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "ProcessEnumerationError",
    "UnsupportedPlatformError",
    "UsageError",
]
