from __future__ import annotations

import json
from pathlib import Path

import pytest

from proxycfg.core.config_store import ConfigStore
from proxycfg.core.errors import LogLevelStoreError
from proxycfg.ports.log_level_store import LogLevel
from proxycfg.storage.json_settings_store import JsonSettingsFile


class FakeLogLevelStore:
    """In-memory LogLevelStore; ``broken`` makes every call fail."""

    def __init__(self, level: LogLevel = LogLevel.INFO) -> None:
        self.level = level
        self.broken = False
        self.set_calls: list[LogLevel] = []

    def get_level(self) -> LogLevel:
        if self.broken:
            raise LogLevelStoreError("unreadable")
        return self.level

    def set_level(self, level: LogLevel) -> None:
        self.set_calls.append(level)
        if self.broken:
            raise LogLevelStoreError("unwritable")
        self.level = level


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Provide an isolated directory for the settings files."""
    d = tmp_path / "config"
    d.mkdir()
    return d


@pytest.fixture
def config_path(config_dir: Path) -> Path:
    return config_dir / "gui-config.json"


@pytest.fixture
def log_levels() -> FakeLogLevelStore:
    return FakeLogLevelStore()


@pytest.fixture
def make_store(config_path: Path, log_levels: FakeLogLevelStore):
    """Factory for a ConfigStore over the temp settings file."""

    def _make(app_version: str = "4.0.0", ipv6: bool = True) -> ConfigStore:
        return ConfigStore(
            JsonSettingsFile(config_path),
            log_levels,
            app_version=app_version,
            ipv6_supported=lambda: ipv6,
        )

    return _make


@pytest.fixture
def write_config(config_path: Path):
    def _write(data) -> Path:
        config_path.write_text(json.dumps(data))
        return config_path

    return _write
