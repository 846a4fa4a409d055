"""Tests for process configuration and the bootstrap run."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from proxycfg.config import AppConfig
from proxycfg.core.config_store import LoadSource
from proxycfg.main import _file_handler, run
from proxycfg.storage.log_level_store import DEFAULT_LOG_CONFIG_INI


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path: Path):
    for key in (
        "PROXYCFG_CONFIG_DIR",
        "PROXYCFG_CONFIG_FILE",
        "PROXYCFG_LOG_CONFIG_FILE",
        "PROXYCFG_LOG_FILE",
    ):
        monkeypatch.delenv(key, raising=False)
    # keep load_dotenv away from any .env in the repo
    monkeypatch.chdir(tmp_path)
    with patch.dict(os.environ):
        yield


class TestAppConfig:
    def test_defaults(self, tmp_path: Path):
        config = AppConfig.from_env()
        assert config.config_path == tmp_path / "gui-config.json"
        assert config.log_config_path == tmp_path / "logging.ini"
        assert config.log_file == ""

    def test_env_overrides(self, monkeypatch, config_dir: Path):
        monkeypatch.setenv("PROXYCFG_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("PROXYCFG_CONFIG_FILE", "client.json")
        monkeypatch.setenv("PROXYCFG_LOG_CONFIG_FILE", "log.ini")
        config = AppConfig.from_env()
        assert config.config_path == config_dir / "client.json"
        assert config.log_config_path == config_dir / "log.ini"

    def test_dotenv_file(self, monkeypatch, tmp_path: Path, config_dir: Path):
        (tmp_path / ".env").write_text(f"PROXYCFG_CONFIG_DIR={config_dir}\n")
        assert AppConfig.from_env().config_dir == config_dir


class TestRun:
    def test_first_run_writes_defaults(self, config_dir: Path):
        config = AppConfig(config_dir=config_dir)
        result = run(config)
        assert result.source is LoadSource.MISSING
        data = json.loads(config.config_path.read_text())
        assert len(data["configs"]) == 1
        assert data["isDefault"] is False
        assert data["index"] == 0

    def test_repairs_existing_file(self, config_dir: Path):
        config = AppConfig(config_dir=config_dir)
        config.log_config_path.write_text(DEFAULT_LOG_CONFIG_INI)
        config.config_path.write_text(json.dumps({
            "version": "2.0.0", "configs": [], "index": -1, "isVerboseLogging": True,
        }))
        result = run(config)
        assert result.source is LoadSource.FILE
        assert result.settings.updated is True

        data = json.loads(config.config_path.read_text())
        assert data["localPort"] == 20808
        assert data["pacPort"] == 20807
        assert data["isVerboseLogging"] is False
        assert "level = INFO" in config.log_config_path.read_text()

    def test_logs_active_endpoint(self, config_dir: Path, caplog):
        config = AppConfig(config_dir=config_dir)
        config.config_path.write_text(json.dumps({
            "configs": [{"server": "proxy.example.com", "server_port": 8443}],
        }))
        with caplog.at_level(logging.DEBUG, logger="proxycfg"):
            run(config)
        assert any("proxy.example.com:8443" in r.getMessage() for r in caplog.records)


class TestFileHandler:
    def test_unopenable_path_returns_none(self, tmp_path: Path, caplog):
        path = tmp_path / "no" / "such" / "dir" / "proxycfg.log"
        with caplog.at_level(logging.WARNING, logger="proxycfg"):
            assert _file_handler(str(path)) is None
        assert any("Cannot open log file" in r.getMessage() for r in caplog.records)

    def test_valid_path(self, tmp_path: Path):
        handler = _file_handler(str(tmp_path / "proxycfg.log"))
        try:
            assert isinstance(handler, logging.FileHandler)
        finally:
            handler.close()
