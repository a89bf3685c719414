"""Process-level settings for the daemon, read from the environment."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from ebbflow.storage.paths import PathResolver, Platform

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class DaemonSettings:
    log_level: str = "INFO"
    log_file: str | None = None
    platform: Platform = field(default_factory=Platform.detect)

    @classmethod
    def from_env(cls) -> DaemonSettings:
        load_dotenv()
        level = os.environ.get("EBBFLOW_LOG_LEVEL", "INFO").upper()
        if level not in _LEVELS:
            raise ValueError(f"EBBFLOW_LOG_LEVEL must be one of {', '.join(_LEVELS)}")
        return cls(
            log_level=level,
            log_file=os.environ.get("EBBFLOW_LOG_FILE") or None,
        )

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    def paths(self) -> PathResolver:
        return PathResolver.for_platform(self.platform)
