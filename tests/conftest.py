from __future__ import annotations

import pytest
from pathlib import Path

from ebbflow.storage.paths import PathResolver


@pytest.fixture
def config_root(tmp_path: Path) -> Path:
    """Provide an isolated config root directory for stores."""
    d = tmp_path / "ebbflow"
    d.mkdir()
    return d


@pytest.fixture
def paths(config_root: Path) -> PathResolver:
    return PathResolver(str(config_root))
