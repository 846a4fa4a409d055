"""Process-level configuration: where the settings files live."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from proxycfg.storage.json_settings_store import CONFIG_FILENAME
from proxycfg.storage.log_level_store import LOG_CONFIG_FILENAME


@dataclass
class AppConfig:
    config_dir: Path = field(default_factory=Path.cwd)
    config_file: str = CONFIG_FILENAME
    log_config_file: str = LOG_CONFIG_FILENAME
    log_file: str = ""

    @property
    def config_path(self) -> Path:
        return self.config_dir / self.config_file

    @property
    def log_config_path(self) -> Path:
        return self.config_dir / self.log_config_file

    @classmethod
    def from_env(cls) -> AppConfig:
        load_dotenv(find_dotenv(usecwd=True))
        config_dir = os.environ.get("PROXYCFG_CONFIG_DIR", "")
        return cls(
            config_dir=Path(config_dir).expanduser() if config_dir else Path.cwd(),
            config_file=os.environ.get("PROXYCFG_CONFIG_FILE", "") or CONFIG_FILENAME,
            log_config_file=os.environ.get("PROXYCFG_LOG_CONFIG_FILE", "")
            or LOG_CONFIG_FILENAME,
            log_file=os.environ.get("PROXYCFG_LOG_FILE", ""),
        )
