"""Shared pytest fixtures for versionkeeper tests.

Store fixtures are parametrized over the memory and SQLite backends so the
end-to-end versioning scenarios run against both.
"""

import logging

import pytest

from versionkeeper.metadata.memory import MemoryMetadataStore
from versionkeeper.metadata.sqlite import SQLiteMetadataStore
from versionkeeper.version_id import HexVersionIdCodec

GROUP_ID = "RG001"


@pytest.fixture
def codec() -> HexVersionIdCodec:
    """A codec with the default replication group."""
    return HexVersionIdCodec(GROUP_ID)


@pytest.fixture(params=["memory", "sqlite"])
async def store(request, codec, tmp_path):
    """A fresh, initialized metadata store of each backend."""
    if request.param == "memory":
        s = MemoryMetadataStore(codec)
    else:
        s = SQLiteMetadataStore(str(tmp_path / "versions.db"), codec)
    await s.init_db()
    yield s
    await s.close()


@pytest.fixture
def restore_root_logging():
    """Undo configure_logging() changes to the root logger after a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
