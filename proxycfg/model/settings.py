"""Settings document — data structures and JSON mapping.

Attribute names are pythonic; the JSON keys keep the layout of the
``gui-config.json`` files written by earlier releases so those files load
unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from proxycfg.core.errors import SettingsParseError


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------

def _as_bool(data: dict, key: str, default: bool) -> bool:
    value = data.get(key, default)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    raise SettingsParseError(f"{key}: expected a boolean, got {value!r}")


def _as_int(data: dict, key: str, default: int) -> int:
    value = data.get(key, default)
    if value is None:
        return default
    if isinstance(value, bool):
        raise SettingsParseError(f"{key}: expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise SettingsParseError(f"{key}: expected an integer, got {value!r}")


def _as_str(data: dict, key: str, default: str | None) -> str | None:
    value = data.get(key, default)
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise SettingsParseError(f"{key}: expected a string, got {value!r}")


def _as_object(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise SettingsParseError(f"{what}: expected an object, got {type(value).__name__}")
    return value


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class ServerProfile:
    """Connection parameters for one proxy server."""

    server: str = ""
    server_port: int = 8388
    password: str = ""
    method: str = "chacha20-ietf-poly1305"
    plugin: str = ""
    plugin_opts: str = ""
    plugin_args: str = ""
    remarks: str = ""
    timeout: int = 5

    def identifier(self) -> str:
        return f"{self.server}:{self.server_port}"

    def friendly_name(self) -> str:
        if not self.server.strip():
            return "New server"
        host = f"[{self.server}]" if ":" in self.server else self.server
        address = f"{host}:{self.server_port}"
        if self.remarks.strip():
            return f"{self.remarks} ({address})"
        return address

    def to_dict(self) -> dict:
        return {
            "server": self.server,
            "server_port": self.server_port,
            "password": self.password,
            "method": self.method,
            "plugin": self.plugin,
            "plugin_opts": self.plugin_opts,
            "plugin_args": self.plugin_args,
            "remarks": self.remarks,
            "timeout": self.timeout,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ServerProfile:
        data = _as_object(data, "configs[]")
        d = cls()
        return cls(
            server=_as_str(data, "server", d.server) or "",
            server_port=_as_int(data, "server_port", d.server_port),
            password=_as_str(data, "password", d.password) or "",
            method=_as_str(data, "method", d.method) or d.method,
            plugin=_as_str(data, "plugin", d.plugin) or "",
            plugin_opts=_as_str(data, "plugin_opts", d.plugin_opts) or "",
            plugin_args=_as_str(data, "plugin_args", d.plugin_args) or "",
            remarks=_as_str(data, "remarks", d.remarks) or "",
            timeout=_as_int(data, "timeout", d.timeout),
        )


@dataclass
class LogViewerSettings:
    """Display options of the log viewer window."""

    top_most: bool = False
    wrap_text: bool = False
    toolbar_shown: bool = False
    font: str = "Consolas, 8pt"
    background_color: str = "Black"
    text_color: str = "White"

    def to_dict(self) -> dict:
        return {
            "topMost": self.top_most,
            "wrapText": self.wrap_text,
            "toolbarShown": self.toolbar_shown,
            "font": self.font,
            "backgroundColor": self.background_color,
            "textColor": self.text_color,
        }

    @classmethod
    def from_dict(cls, data: dict) -> LogViewerSettings:
        data = _as_object(data, "logViewer")
        d = cls()
        return cls(
            top_most=_as_bool(data, "topMost", d.top_most),
            wrap_text=_as_bool(data, "wrapText", d.wrap_text),
            toolbar_shown=_as_bool(data, "toolbarShown", d.toolbar_shown),
            font=_as_str(data, "font", d.font) or d.font,
            background_color=_as_str(data, "backgroundColor", d.background_color) or d.background_color,
            text_color=_as_str(data, "textColor", d.text_color) or d.text_color,
        )


@dataclass
class Settings:
    """The persisted client configuration (maps to ``gui-config.json``).

    ``updated`` is transient: it is set by the loader when the file was
    written by an older release and is never serialized.
    """

    version: str | None = None
    profiles: list[ServerProfile] = field(default_factory=list)
    # ignored by callers that engage a load-balancing strategy
    active_index: int = 0
    global_mode: bool = False
    enabled: bool = False
    share_over_lan: bool = False
    is_default: bool = False
    is_ipv6_enabled: bool = False
    local_port: int = 0
    pac_port: int = 0
    portable_mode: bool = True
    show_plugin_output: bool = False
    pac_url: str | None = None
    gfwlist_url: str | None = None
    use_online_pac: bool = False
    secure_local_pac: bool = True
    availability_statistics: bool = False
    auto_check_update: bool = False
    check_pre_release: bool = False
    is_verbose_logging: bool = False
    log_viewer: LogViewerSettings | None = None
    updated: bool = False

    @property
    def local_host(self) -> str:
        return "[::1]" if self.is_ipv6_enabled else "127.0.0.1"

    def current_profile(self) -> ServerProfile:
        """Return the active profile, or a fresh default when the index is off."""
        if 0 <= self.active_index < len(self.profiles):
            return self.profiles[self.active_index]
        return ServerProfile()

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "configs": [p.to_dict() for p in self.profiles],
            "index": self.active_index,
            "global": self.global_mode,
            "enabled": self.enabled,
            "shareOverLan": self.share_over_lan,
            "isDefault": self.is_default,
            "isIPv6Enabled": self.is_ipv6_enabled,
            "localPort": self.local_port,
            "pacPort": self.pac_port,
            "portableMode": self.portable_mode,
            "showPluginOutput": self.show_plugin_output,
            "pacUrl": self.pac_url,
            "gfwListUrl": self.gfwlist_url,
            "useOnlinePac": self.use_online_pac,
            "secureLocalPac": self.secure_local_pac,
            "availabilityStatistics": self.availability_statistics,
            "autoCheckUpdate": self.auto_check_update,
            "checkPreRelease": self.check_pre_release,
            "isVerboseLogging": self.is_verbose_logging,
            "logViewer": self.log_viewer.to_dict() if self.log_viewer else None,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Settings:
        """Build settings from a decoded JSON document.

        Missing keys take their defaults; unknown keys are ignored.
        Raises SettingsParseError when a value has the wrong shape.
        """
        data = _as_object(data, "document")
        d = cls()

        configs = data.get("configs")
        if configs is None:
            profiles = []
        elif isinstance(configs, list):
            profiles = [ServerProfile.from_dict(c) for c in configs]
        else:
            raise SettingsParseError(
                f"configs: expected a list, got {type(configs).__name__}"
            )

        log_viewer = data.get("logViewer")

        return cls(
            version=_as_str(data, "version", None),
            profiles=profiles,
            active_index=_as_int(data, "index", d.active_index),
            global_mode=_as_bool(data, "global", d.global_mode),
            enabled=_as_bool(data, "enabled", d.enabled),
            share_over_lan=_as_bool(data, "shareOverLan", d.share_over_lan),
            is_default=_as_bool(data, "isDefault", d.is_default),
            is_ipv6_enabled=_as_bool(data, "isIPv6Enabled", d.is_ipv6_enabled),
            local_port=_as_int(data, "localPort", d.local_port),
            pac_port=_as_int(data, "pacPort", d.pac_port),
            portable_mode=_as_bool(data, "portableMode", d.portable_mode),
            show_plugin_output=_as_bool(data, "showPluginOutput", d.show_plugin_output),
            pac_url=_as_str(data, "pacUrl", d.pac_url),
            gfwlist_url=_as_str(data, "gfwListUrl", d.gfwlist_url),
            use_online_pac=_as_bool(data, "useOnlinePac", d.use_online_pac),
            secure_local_pac=_as_bool(data, "secureLocalPac", d.secure_local_pac),
            availability_statistics=_as_bool(
                data, "availabilityStatistics", d.availability_statistics,
            ),
            auto_check_update=_as_bool(data, "autoCheckUpdate", d.auto_check_update),
            check_pre_release=_as_bool(data, "checkPreRelease", d.check_pre_release),
            is_verbose_logging=_as_bool(data, "isVerboseLogging", d.is_verbose_logging),
            log_viewer=(
                LogViewerSettings.from_dict(log_viewer) if log_viewer is not None else None
            ),
        )
