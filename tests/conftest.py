from __future__ import annotations

from pathlib import Path
import sys

import pytest


sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from news_curator.config import Config  # noqa: E402
from news_curator.storage.repository import CurationStore  # noqa: E402


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(database_url=f"sqlite:///{tmp_path / 'curator.db'}", api_key="k")


@pytest.fixture
def store(config) -> CurationStore:
    return CurationStore.from_config(config)
