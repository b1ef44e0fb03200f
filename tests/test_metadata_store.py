"""Tests for the versioned metadata store backends.

The ``store`` fixture runs every test against both the memory and the
SQLite backend.
"""

import pytest

from versionkeeper.config import MetadataConfig
from versionkeeper.errors import NoSuchKey
from versionkeeper.metadata import create_metadata_store
from versionkeeper.metadata.memory import MemoryMetadataStore
from versionkeeper.metadata.sqlite import SQLiteMetadataStore


class TestMasterOnly:
    """Writes without version ids (unconfigured buckets)."""

    async def test_put_get(self, store):
        assert await store.put_object("b", "k", {"location": "a"}) is None
        assert await store.get_object("b", "k") == {"location": "a"}

    async def test_get_missing(self, store):
        with pytest.raises(NoSuchKey):
            await store.get_object("b", "missing")

    async def test_delete(self, store):
        await store.put_object("b", "k", {"location": "a"})
        await store.delete_object("b", "k")
        with pytest.raises(NoSuchKey):
            await store.get_object("b", "k")

    async def test_delete_missing(self, store):
        with pytest.raises(NoSuchKey):
            await store.delete_object("b", "k")

    async def test_returned_record_is_a_copy(self, store):
        """Mutating a returned record does not change the stored one."""
        await store.put_object("b", "k", {"location": ["a"]})
        record = await store.get_object("b", "k")
        record["location"].append("b")
        assert await store.get_object("b", "k") == {"location": ["a"]}


class TestVersioned:
    """Writes creating or addressing versions."""

    async def test_versioning_writes_version_and_master(self, store):
        vid = await store.put_object("b", "k", {"location": "a"}, versioning=True)
        assert vid
        assert (await store.get_object("b", "k"))["versionId"] == vid
        assert (await store.get_object("b", "k", version_id=vid))["location"] == "a"

    async def test_empty_version_id_overwrites_master_only(self, store):
        """A suspended write replaces the master without a version key."""
        await store.put_object("b", "k", {"location": "a"}, versioning=True)
        vid = await store.put_object("b", "k", {"location": "n", "isNull": True}, version_id="")
        master = await store.get_object("b", "k")
        assert master["versionId"] == vid
        assert master["location"] == "n"
        assert len(await store.list_versions("b", "k")) == 1
        # the null master is still addressable by its version id
        assert (await store.get_object("b", "k", version_id=vid))["location"] == "n"

    async def test_explicit_version_leaves_other_master(self, store):
        """Writing an older version key does not replace the master."""
        await store.put_object("b", "k", {"location": "a"})
        await store.put_object("b", "k", {"location": "a", "isNull": True}, version_id="S")
        assert "versionId" not in await store.get_object("b", "k")
        assert (await store.get_object("b", "k", version_id="S"))["versionId"] == "S"

    async def test_explicit_version_updates_matching_master(self, store):
        vid = await store.put_object("b", "k", {"location": "a"}, version_id="")
        await store.put_object("b", "k", {"location": "a", "isNull": True}, version_id=vid)
        assert (await store.get_object("b", "k"))["isNull"] is True

    async def test_delete_version(self, store):
        v1 = await store.put_object("b", "k", {"location": "a"}, versioning=True)
        v2 = await store.put_object("b", "k", {"location": "b"}, versioning=True)
        await store.delete_object("b", "k", version_id=v1)
        with pytest.raises(NoSuchKey):
            await store.get_object("b", "k", version_id=v1)
        assert (await store.get_object("b", "k"))["versionId"] == v2

    async def test_delete_master_version_promotes_newest(self, store):
        """Deleting the current version makes the next newest the master."""
        v1 = await store.put_object("b", "k", {"location": "a"}, versioning=True)
        v2 = await store.put_object("b", "k", {"location": "b"}, versioning=True)
        await store.delete_object("b", "k", version_id=v2)
        assert (await store.get_object("b", "k"))["versionId"] == v1

    async def test_delete_last_version_removes_master(self, store):
        vid = await store.put_object("b", "k", {"location": "a"}, versioning=True)
        await store.delete_object("b", "k", version_id=vid, replay_id="U1")
        with pytest.raises(NoSuchKey):
            await store.get_object("b", "k")

    async def test_delete_missing_version(self, store):
        await store.put_object("b", "k", {"location": "a"}, versioning=True)
        with pytest.raises(NoSuchKey):
            await store.delete_object("b", "k", version_id="nope")

    async def test_list_versions_newest_first(self, store):
        v1 = await store.put_object("b", "k", {"location": "a"}, versioning=True)
        v2 = await store.put_object("b", "k", {"location": "b"}, versioning=True)
        assert [v["versionId"] for v in await store.list_versions("b", "k")] == [v2, v1]

    async def test_keys_are_isolated(self, store):
        await store.put_object("b", "k1", {"location": "a"}, versioning=True)
        assert await store.list_versions("b", "k2") == []
        with pytest.raises(NoSuchKey):
            await store.get_object("other", "k1")


class TestSQLitePersistence:
    """SQLite-specific behavior."""

    async def test_init_db_twice(self, tmp_path, codec):
        """Calling init_db twice on the same DB does not raise."""
        s = SQLiteMetadataStore(str(tmp_path / "idempotent.db"), codec)
        await s.init_db()
        await s.init_db()
        await s.close()

    async def test_reopen_after_close(self, tmp_path, codec):
        """Records survive closing and re-opening the database."""
        db_path = str(tmp_path / "reopen.db")
        s1 = SQLiteMetadataStore(db_path, codec)
        await s1.init_db()
        vid = await s1.put_object("b", "k", {"location": ["a", "b"]}, versioning=True)
        await s1.close()

        s2 = SQLiteMetadataStore(db_path, codec)
        await s2.init_db()
        record = await s2.get_object("b", "k", version_id=vid)
        assert record["location"] == ["a", "b"]
        await s2.close()


class TestCreateMetadataStore:
    """Tests for create_metadata_store()."""

    def test_memory(self, codec):
        assert isinstance(create_metadata_store(MetadataConfig(engine="memory"), codec), MemoryMetadataStore)

    def test_sqlite(self, codec, tmp_path):
        config = MetadataConfig(engine="sqlite", sqlite_path=str(tmp_path / "m.db"))
        store = create_metadata_store(config, codec)
        assert isinstance(store, SQLiteMetadataStore)
        assert store.db_path == str(tmp_path / "m.db")

    def test_unknown(self, codec):
        with pytest.raises(ValueError, match="Unknown metadata engine"):
            create_metadata_store(MetadataConfig(engine="cassandra"), codec)
