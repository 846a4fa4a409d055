"""Exception types raised by the configuration core."""
from __future__ import annotations


class ProxyCfgError(Exception):
    """Base class for all proxycfg errors."""


class SettingsParseError(ProxyCfgError):
    """The settings document exists but does not have the expected shape."""


class LogLevelStoreError(ProxyCfgError):
    """The logging-level store could not be read or written."""


class ValidationError(ProxyCfgError, ValueError):
    """User-supplied value rejected by a validator.

    ``key`` is a stable identifier callers can use to look up a localized
    message; ``str(exc)`` is the English fallback.
    """

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key
