from __future__ import annotations

import logging
from pathlib import Path

import yaml

from ebbflow.storage.errors import (
    ConfigFileNotFoundError,
    EmptyError,
    ParsingError,
    run_io,
)
from ebbflow.storage.paths import PathResolver
from ebbflow.storage.schema import EbbflowDaemonConfig, dump_config, parse_possibly_empty

logger = logging.getLogger(__name__)


class ConfigStore:
    """Load/save lifecycle of ``config.yaml``.

    Each call reads or writes the file afresh; nothing is cached between
    calls. Concurrent saves are last-writer-wins, callers that need
    ordering serialize them.
    """

    def __init__(self, paths: PathResolver) -> None:
        self._config_path = Path(paths.config_file_path())
        self._key_path = Path(paths.key_file_path())

    async def check_permissions(self) -> None:
        """Open both files for writing without touching their content.

        Missing files are created. Surfaces permission problems at start-up
        rather than on the first save.
        """
        for path in (self._config_path, self._key_path):

            def _sync_touch(p: Path = path) -> None:
                # append mode creates but never truncates
                with p.open("ab"):
                    pass

            await run_io(_sync_touch, str(path))
            logger.debug("Write access ok: %s", path)

    async def load_from_file(self) -> EbbflowDaemonConfig:
        """Parse ``config.yaml``.

        Raises :class:`EmptyError` for a file with no YAML value and
        :class:`ParsingError` for anything that doesn't match the schema.
        """
        raw = await run_io(self._config_path.read_bytes, str(self._config_path))
        try:
            config = parse_possibly_empty(raw)
        except (yaml.YAMLError, KeyError, TypeError, ValueError) as e:
            logger.info("Error parsing configuration file %s: %s", self._config_path, e)
            raise ParsingError(f"Invalid configuration file: {self._config_path}") from e
        if config is None:
            raise EmptyError(f"Configuration file is empty: {self._config_path}")
        logger.info(
            "Loaded %d endpoints from %s", len(config.endpoints), self._config_path,
        )
        return config

    async def load_from_file_or_new(self) -> EbbflowDaemonConfig:
        """Like :meth:`load_from_file`, but a missing or empty file yields a
        default config. Parsing and permission errors still propagate."""
        try:
            return await self.load_from_file()
        except (EmptyError, ConfigFileNotFoundError) as e:
            logger.info("No existing configuration (%s), using defaults", e.kind.value)
            return EbbflowDaemonConfig()

    async def save_to_file(self, config: EbbflowDaemonConfig) -> None:
        """Serialize *config* and overwrite ``config.yaml``."""
        try:
            text = dump_config(config)
        except (yaml.YAMLError, AttributeError, TypeError, ValueError) as e:
            logger.info("Error serializing current configuration to YAML: %s", e)
            raise ParsingError("Could not serialize configuration") from e

        def _sync_write() -> None:
            self._config_path.write_text(text, encoding="utf-8")

        await run_io(_sync_write, str(self._config_path))
        logger.info("Saved configuration to %s", self._config_path)
