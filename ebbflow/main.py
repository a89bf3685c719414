from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import dataclass

from ebbflow.config import DaemonSettings
from ebbflow.storage.config_store import ConfigStore
from ebbflow.storage.errors import ConfigError
from ebbflow.storage.key_store import KeyStore
from ebbflow.storage.paths import PathResolver
from ebbflow.storage.schema import EbbflowDaemonConfig

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

logger = logging.getLogger("ebbflow")


@dataclass
class DaemonState:
    config: EbbflowDaemonConfig
    key: str


def configure_logging(settings: DaemonSettings) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))
    logging.basicConfig(
        level=settings.log_level_value,
        format=LOG_FORMAT,
        handlers=handlers,
    )


async def startup(paths: PathResolver) -> DaemonState:
    """Load everything the daemon needs before it can connect.

    A config that was never written (or is empty) becomes an empty default.
    A missing or blank key, a corrupt config, or unwritable files raise
    :class:`ConfigError` for the caller to report.
    """
    config_store = ConfigStore(paths)
    key_store = KeyStore(paths)

    await config_store.check_permissions()
    config = await config_store.load_from_file_or_new()
    key = await key_store.get_key()
    return DaemonState(config=config, key=key)


def run() -> None:
    settings = DaemonSettings.from_env()
    configure_logging(settings)
    paths = settings.paths()
    logger.info("Checking configuration under %s", paths.config_root())

    try:
        state = asyncio.run(startup(paths))
    except ConfigError as e:
        logger.error("Configuration problem (%s): %s", e.kind.value, e)
        sys.exit(1)

    enabled = sum(1 for e in state.config.endpoints if e.enabled)
    logger.info(
        "Configuration ok: %d endpoints (%d enabled), ssh %s",
        len(state.config.endpoints),
        enabled,
        "enabled" if state.config.ssh and state.config.ssh.enabled else "disabled",
    )


if __name__ == "__main__":
    run()
