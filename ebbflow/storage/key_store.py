from __future__ import annotations

import logging
from pathlib import Path

from ebbflow.storage.errors import EmptyError, UnknownConfigError, run_io
from ebbflow.storage.paths import PathResolver

logger = logging.getLogger(__name__)


class KeyStore:
    """Reads and writes the host key used to authenticate with Ebbflow.

    The key file is raw text. Surrounding whitespace is stripped on read,
    and writes store exactly the trimmed value with no trailing newline.
    """

    def __init__(self, paths: PathResolver) -> None:
        self._path = Path(paths.key_file_path())

    async def get_key(self) -> str:
        """Return the trimmed key. Raises :class:`EmptyError` if blank."""
        raw = await run_io(self._path.read_bytes, str(self._path))
        try:
            key = raw.decode("utf-8").strip()
        except UnicodeDecodeError as e:
            raise UnknownConfigError(f"Key file {self._path} is not valid UTF-8") from e
        if not key:
            raise EmptyError(f"Key file is empty: {self._path}")
        return key

    async def set_key(self, key: str) -> None:
        """Overwrite the key file with the trimmed *key*."""
        data = key.strip().encode("utf-8")

        def _sync_write() -> None:
            self._path.write_bytes(data)

        await run_io(_sync_write, str(self._path))
        logger.info("Saved host key to %s", self._path)
