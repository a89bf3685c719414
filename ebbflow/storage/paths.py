"""Platform-fixed storage locations for the daemon config and host key."""
from __future__ import annotations

import logging
import ntpath
import posixpath
import sys
from enum import Enum

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.yaml"
KEY_FILE = "host.key"


class Platform(Enum):
    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"

    @classmethod
    def detect(cls) -> Platform:
        """Resolve the host platform family from ``sys.platform``."""
        if sys.platform.startswith("win"):
            return cls.WINDOWS
        if sys.platform == "darwin":
            return cls.MACOS
        return cls.LINUX


CONFIG_ROOTS: dict[Platform, str] = {
    Platform.LINUX: "/etc/ebbflow",
    Platform.MACOS: "/usr/local/etc/ebbflow",
    Platform.WINDOWS: "\\Program Files\\ebbflow",
}


class PathResolver:
    """Derives the config and key file paths from a root directory.

    Built once at start-up and handed to the stores. Tests inject a
    temporary *root* instead of the platform default.
    """

    def __init__(self, root: str, platform: Platform = Platform.LINUX) -> None:
        self._root = root
        self._platform = platform

    @classmethod
    def for_platform(cls, platform: Platform | None = None) -> PathResolver:
        platform = platform or Platform.detect()
        logger.debug("Using %s config root for %s", CONFIG_ROOTS[platform], platform.value)
        return cls(CONFIG_ROOTS[platform], platform)

    @property
    def platform(self) -> Platform:
        return self._platform

    def _join(self, name: str) -> str:
        if self._platform is Platform.WINDOWS:
            return ntpath.join(self._root, name)
        return posixpath.join(self._root, name)

    def config_root(self) -> str:
        return self._root

    def config_file_path(self) -> str:
        return self._join(CONFIG_FILE)

    def key_file_path(self) -> str:
        return self._join(KEY_FILE)
