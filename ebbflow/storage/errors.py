"""Error taxonomy shared by the key and config stores.

Raw ``OSError``s are classified once, where they leave the filesystem
call, so callers only ever branch on :class:`ConfigErrorKind`.
"""
from __future__ import annotations

import asyncio
from enum import Enum
from typing import Callable, TypeVar

T = TypeVar("T")


class ConfigErrorKind(Enum):
    PARSING = "parsing"
    FILE_NOT_FOUND = "file_not_found"
    FILE_PERMISSIONS = "file_permissions"
    EMPTY = "empty"
    UNKNOWN = "unknown"


class ConfigError(Exception):
    """Base class for every failure surfaced by the storage layer."""

    kind: ConfigErrorKind = ConfigErrorKind.UNKNOWN

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.kind.value)

    @staticmethod
    def from_os_error(exc: OSError, path: str) -> ConfigError:
        if isinstance(exc, FileNotFoundError):
            return ConfigFileNotFoundError(f"File not found: {path}")
        if isinstance(exc, PermissionError):
            return FilePermissionsError(f"Permission denied: {path}")
        return UnknownConfigError(f"Unexpected error accessing {path}: {exc!r}")


class ParsingError(ConfigError):
    kind = ConfigErrorKind.PARSING


class ConfigFileNotFoundError(ConfigError):
    kind = ConfigErrorKind.FILE_NOT_FOUND


class FilePermissionsError(ConfigError):
    kind = ConfigErrorKind.FILE_PERMISSIONS


class EmptyError(ConfigError):
    kind = ConfigErrorKind.EMPTY


class UnknownConfigError(ConfigError):
    """Any other I/O failure. ``detail`` is for operators only."""

    kind = ConfigErrorKind.UNKNOWN

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


async def run_io(fn: Callable[[], T], path: str) -> T:
    """Run blocking file I/O in the default executor.

    This is the only place the stores turn an ``OSError`` into a
    :class:`ConfigError`.
    """
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, fn)
    except OSError as e:
        raise ConfigError.from_os_error(e, path) from e
