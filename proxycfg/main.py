from __future__ import annotations

import logging

from proxycfg.config import AppConfig
from proxycfg.core.config_store import ConfigStore, LoadResult, LoadSource
from proxycfg.storage.log_level_store import IniLogLevelStore, register_trace_level

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

logger = logging.getLogger("proxycfg")


def _file_handler(path: str) -> logging.Handler | None:
    try:
        handler = logging.FileHandler(path)
    except OSError:
        logger.warning("Cannot open log file %s, logging to console only", path, exc_info=True)
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def setup_logging(config: AppConfig) -> None:
    """Configure logging from the logging config file, or a plain fallback."""
    register_trace_level()
    store = IniLogLevelStore(config.log_config_path)
    try:
        store.ensure_default()
        store.apply()
    except (OSError, ValueError, KeyError, RuntimeError) as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.warning("Falling back to default logging: %s", e)
    if config.log_file:
        handler = _file_handler(config.log_file)
        if handler is not None:
            logging.getLogger().addHandler(handler)


def run(config: AppConfig) -> LoadResult:
    """Load, repair and write back the settings document once."""
    store = ConfigStore.from_config(config)
    result = store.load()
    settings = result.settings

    if result.source is LoadSource.MISSING:
        logger.info("No settings at %s, writing defaults", config.config_path)
    elif result.source is LoadSource.INVALID:
        logger.warning("Settings at %s were unusable, replaced by defaults", config.config_path)
    if settings.updated:
        logger.info("Settings were written by an older release, now %s", store.app_version)

    profile = settings.current_profile()
    logger.info(
        "%d profile(s), active: %s, local proxy %s:%d",
        len(settings.profiles), profile.friendly_name(),
        settings.local_host, settings.local_port,
    )
    logger.debug("Active endpoint %s", profile.identifier())

    store.save(settings)
    return result


def main() -> None:
    config = AppConfig.from_env()
    setup_logging(config)
    run(config)


if __name__ == "__main__":
    main()
