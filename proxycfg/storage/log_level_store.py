"""Logging-level store backed by a ``logging.config.fileConfig`` INI file.

The verbosity lives in the ``level`` option of ``[logger_root]``. The rest
of the file (handlers, formatters) belongs to whoever maintains it and is
carried through rewrites untouched.
"""
from __future__ import annotations

import configparser
import io
import logging
import logging.config
from pathlib import Path

from proxycfg.core.errors import LogLevelStoreError
from proxycfg.ports.log_level_store import LogLevel
from proxycfg.storage.atomic import atomic_write_text

logger = logging.getLogger(__name__)

LOG_CONFIG_FILENAME = "logging.ini"
ROOT_SECTION = "logger_root"

TRACE = 5

DEFAULT_LOG_CONFIG_INI = """\
[loggers]
keys=root

[handlers]
keys=console

[formatters]
keys=default

[logger_root]
level=INFO
handlers=console

[handler_console]
class=StreamHandler
level=NOTSET
formatter=default
args=(sys.stderr,)

[formatter_default]
format=%(asctime)s [%(name)s] %(levelname)s: %(message)s
"""

_TO_PYTHON = {
    LogLevel.FATAL: "CRITICAL",
    LogLevel.ERROR: "ERROR",
    LogLevel.WARN: "WARNING",
    LogLevel.INFO: "INFO",
    LogLevel.DEBUG: "DEBUG",
    LogLevel.TRACE: "TRACE",
}

_FROM_PYTHON = {
    "CRITICAL": LogLevel.FATAL,
    "FATAL": LogLevel.FATAL,
    "ERROR": LogLevel.ERROR,
    "WARNING": LogLevel.WARN,
    "WARN": LogLevel.WARN,
    "INFO": LogLevel.INFO,
    "DEBUG": LogLevel.DEBUG,
    "TRACE": LogLevel.TRACE,
    "NOTSET": LogLevel.TRACE,
}


def register_trace_level() -> None:
    """Make ``TRACE`` a known level name for ``logging`` and fileConfig."""
    if logging.getLevelName(TRACE) != "TRACE":
        logging.addLevelName(TRACE, "TRACE")


class IniLogLevelStore:
    """Reads and writes the root logger level of a fileConfig INI file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _read_parser(self) -> configparser.ConfigParser:
        parser = configparser.ConfigParser(interpolation=None)
        try:
            with self._path.open(encoding="utf-8") as f:
                parser.read_file(f)
        except OSError as e:
            raise LogLevelStoreError(f"Cannot read {self._path}: {e}") from e
        except (configparser.Error, UnicodeDecodeError) as e:
            raise LogLevelStoreError(f"Malformed {self._path}: {e}") from e
        if not parser.has_option(ROOT_SECTION, "level"):
            raise LogLevelStoreError(
                f"{self._path} has no [{ROOT_SECTION}] level option"
            )
        return parser

    def get_level(self) -> LogLevel:
        parser = self._read_parser()
        name = parser.get(ROOT_SECTION, "level").strip().upper()
        try:
            return _FROM_PYTHON[name]
        except KeyError:
            raise LogLevelStoreError(
                f"Unknown log level {name!r} in {self._path}"
            ) from None

    def set_level(self, level: LogLevel) -> None:
        parser = self._read_parser()
        parser.set(ROOT_SECTION, "level", _TO_PYTHON[level])
        buf = io.StringIO()
        parser.write(buf)
        try:
            atomic_write_text(self._path, buf.getvalue())
        except OSError as e:
            raise LogLevelStoreError(f"Cannot write {self._path}: {e}") from e
        logger.debug("Set log level %s in %s", level.name, self._path)

    def ensure_default(self) -> bool:
        """Write the default logging config if none exists. Returns True if created."""
        if self._path.exists():
            return False
        atomic_write_text(self._path, DEFAULT_LOG_CONFIG_INI)
        logger.info("Created default logging config at %s", self._path)
        return True

    def apply(self) -> None:
        """Configure the ``logging`` module from this file."""
        register_trace_level()
        logging.config.fileConfig(str(self._path), disable_existing_loggers=False)
