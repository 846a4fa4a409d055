"""Load, repair and save the client settings document.

The settings file and the logging-level store are two independent
collaborators. A failure in one never blocks or rolls back the other, and
no I/O error escapes ``load()`` or ``save()``: they are logged and the
caller gets a usable Settings object regardless.
"""
from __future__ import annotations

import enum
import logging
import socket
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from proxycfg.core.errors import LogLevelStoreError, SettingsParseError
from proxycfg.core.version import APP_VERSION, compare_version
from proxycfg.model.settings import LogViewerSettings, ServerProfile, Settings
from proxycfg.ports.log_level_store import LogLevel, LogLevelStore
from proxycfg.ports.settings_store import SettingsStore

if TYPE_CHECKING:
    from proxycfg.config import AppConfig

logger = logging.getLogger(__name__)

LOCAL_PORT = 20808
PAC_PORT = 20807
FALLBACK_LOCAL_PORT = 1091


class LoadSource(enum.Enum):
    FILE = "file"        # document read and repaired
    MISSING = "missing"  # no document, fallback returned
    INVALID = "invalid"  # document unusable, fallback returned


@dataclass
class LoadResult:
    settings: Settings
    source: LoadSource
    error: Exception | None = None


def os_supports_ipv6() -> bool:
    return socket.has_ipv6


def default_profile() -> ServerProfile:
    return ServerProfile()


def add_profile(
    settings: Settings | None,
    profile: ServerProfile | None = None,
    index: int | None = None,
) -> ServerProfile:
    """Insert *profile* (or a new default) at *index*, appending by default.

    Returns the profile. Nothing is mutated when *settings* or its profile
    list is missing.
    """
    profile = profile if profile is not None else default_profile()
    if settings is None or settings.profiles is None:
        return profile
    if index is None:
        index = len(settings.profiles)
    settings.profiles.insert(index, profile)
    return profile


def fallback_settings() -> Settings:
    """Settings used when no usable document exists."""
    return Settings(
        profiles=[default_profile()],
        active_index=0,
        is_default=True,
        local_port=FALLBACK_LOCAL_PORT,
        auto_check_update=True,
        log_viewer=LogViewerSettings(),
    )


class ConfigStore:
    """Owns the round trip of Settings through its two backing stores."""

    add_profile = staticmethod(add_profile)
    default_profile = staticmethod(default_profile)

    def __init__(
        self,
        settings_store: SettingsStore,
        log_level_store: LogLevelStore,
        *,
        app_version: str = APP_VERSION,
        ipv6_supported: Callable[[], bool] = os_supports_ipv6,
    ) -> None:
        self._settings_store = settings_store
        self._log_level_store = log_level_store
        self._app_version = app_version
        self._ipv6_supported = ipv6_supported

    @classmethod
    def from_config(cls, config: AppConfig, **kwargs) -> ConfigStore:
        from proxycfg.storage.json_settings_store import JsonSettingsFile
        from proxycfg.storage.log_level_store import IniLogLevelStore

        return cls(
            JsonSettingsFile(config.config_path),
            IniLogLevelStore(config.log_config_path),
            **kwargs,
        )

    @property
    def app_version(self) -> str:
        return self._app_version

    # -- Load ---------------------------------------------------------------

    def load(self) -> LoadResult:
        try:
            data = self._settings_store.read()
            settings = Settings.from_dict(data)
        except FileNotFoundError as e:
            logger.debug("No settings file, using defaults: %s", e)
            return LoadResult(fallback_settings(), LoadSource.MISSING, e)
        except (SettingsParseError, OSError) as e:
            logger.error("Failed to load settings, using defaults: %s", e, exc_info=True)
            return LoadResult(fallback_settings(), LoadSource.INVALID, e)

        settings.is_default = False
        if compare_version(self._app_version, settings.version or "0") > 0:
            settings.updated = True
        self._repair(settings)
        self._read_verbosity(settings)
        return LoadResult(settings, LoadSource.FILE)

    def _repair(self, settings: Settings) -> None:
        if not settings.profiles:
            settings.profiles.append(default_profile())
        if settings.local_port == 0:
            settings.local_port = LOCAL_PORT
        if settings.pac_port == 0:
            settings.pac_port = PAC_PORT
        if settings.active_index == -1:
            settings.active_index = 0
        if settings.log_viewer is None:
            settings.log_viewer = LogViewerSettings()
        if not self._ipv6_supported():
            settings.is_ipv6_enabled = False

    def _read_verbosity(self, settings: Settings) -> None:
        try:
            level = self._log_level_store.get_level()
        except LogLevelStoreError:
            logger.error(
                "Cannot get the log level from the logging config file. "
                "Check that it exists and has a [logger_root] level.",
                exc_info=True,
            )
            return
        settings.is_verbose_logging = level.is_verbose

    # -- Save ---------------------------------------------------------------

    def save(self, settings: Settings) -> None:
        settings.version = self._app_version
        count = len(settings.profiles)
        if settings.active_index >= count:
            settings.active_index = count - 1
        if settings.active_index < -1:
            settings.active_index = -1
        if settings.active_index == -1:
            settings.active_index = 0
        settings.is_default = False

        try:
            self._settings_store.write(settings.to_dict())
        except OSError:
            logger.error("Failed to save settings", exc_info=True)

        level = LogLevel.for_verbosity(settings.is_verbose_logging)
        try:
            self._log_level_store.set_level(level)
        except LogLevelStoreError:
            logger.error(
                "Cannot set the log level in the logging config file. "
                "Check that it exists and has a [logger_root] level.",
                exc_info=True,
            )
