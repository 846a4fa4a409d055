from __future__ import annotations

import enum
from typing import Protocol, runtime_checkable


class LogLevel(enum.Enum):
    FATAL = "fatal"
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"

    @property
    def is_verbose(self) -> bool:
        return self in (LogLevel.DEBUG, LogLevel.TRACE)

    @classmethod
    def for_verbosity(cls, verbose: bool) -> LogLevel:
        return cls.TRACE if verbose else cls.INFO


@runtime_checkable
class LogLevelStore(Protocol):
    """External store holding the persisted logging verbosity."""

    def get_level(self) -> LogLevel:
        """Return the stored level. Raises LogLevelStoreError if unreadable."""
        ...

    def set_level(self, level: LogLevel) -> None:
        """Persist *level*. Raises LogLevelStoreError if unwritable."""
        ...
