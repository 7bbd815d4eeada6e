from __future__ import annotations

import shutil
from pathlib import Path
from typing import Generator

import pytest

from infra.persistence import SQLiteDocumentStore
from test.fixtures import sample_config_dir
from test.mocks import SequentialIdGenerator


@pytest.fixture()
def sqlite_store(tmp_path: Path) -> Generator[SQLiteDocumentStore, None, None]:
    """A file-backed document store in a fresh temporary database."""
    store = SQLiteDocumentStore(SequentialIdGenerator(), db_path=str(tmp_path / "tracker.db"))
    yield store
    store.close()


@pytest.fixture()
def config_dir(tmp_path: Path) -> Path:
    """A writable copy of the sample config folder."""
    target = tmp_path / "config"
    shutil.copytree(sample_config_dir(), target)
    return target
