"""SQLite-backed versioned metadata store for versionkeeper.

Implements the MetadataStore protocol using aiosqlite for async access.
Records are stored as JSON text; master and version records live in
separate tables keyed by (bucket, key) and (bucket, key, version_id).
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

import aiosqlite

from versionkeeper.errors import NoSuchKey
from versionkeeper.version_id import VersionIdCodec

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    """Return the current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")


def _dump(record: dict[str, Any]) -> str:
    return json.dumps(record, default=str, sort_keys=True)


class SQLiteMetadataStore:
    """Metadata store backed by a local SQLite database.

    Attributes:
        db_path: Path to the SQLite database file.
        _db: The aiosqlite connection, set after init_db().
    """

    def __init__(self, db_path: str, codec: VersionIdCodec) -> None:
        """Initialize the SQLite metadata store.

        Args:
            db_path: Filesystem path to the SQLite database file.
                     Use ':memory:' for an in-memory database (useful in tests).
            codec: Version id codec used to generate new version ids.
        """
        self.db_path = db_path
        self._codec = codec
        self._db: aiosqlite.Connection | None = None

    async def init_db(self) -> None:
        """Open the database and create tables if they do not exist.

        Idempotent -- safe to call on every startup.
        """
        if self._db is None:
            self._db = await aiosqlite.connect(self.db_path)
            self._db.row_factory = aiosqlite.Row

            await self._db.execute("PRAGMA journal_mode = WAL")
            await self._db.execute("PRAGMA synchronous = NORMAL")
            await self._db.execute("PRAGMA busy_timeout = 5000")

        await self._db.executescript("""
            CREATE TABLE IF NOT EXISTS object_masters (
                bucket      TEXT NOT NULL,
                key         TEXT NOT NULL,
                version_id  TEXT,
                record      TEXT NOT NULL,
                updated_at  TEXT NOT NULL,

                PRIMARY KEY (bucket, key)
            );

            CREATE TABLE IF NOT EXISTS object_versions (
                bucket      TEXT NOT NULL,
                key         TEXT NOT NULL,
                version_id  TEXT NOT NULL,
                record      TEXT NOT NULL,
                updated_at  TEXT NOT NULL,

                PRIMARY KEY (bucket, key, version_id)
            );

            CREATE TABLE IF NOT EXISTS schema_version (
                version    INTEGER PRIMARY KEY,
                applied_at TEXT NOT NULL
            );
        """)

        await self._db.execute(
            "INSERT OR IGNORE INTO schema_version (version, applied_at) VALUES (1, ?)",
            (_now_iso(),),
        )
        await self._db.commit()

    async def close(self) -> None:
        """Close the database connection."""
        if self._db is not None:
            await self._db.close()
            self._db = None

    # -- Internal helpers ------------------------------------------------------

    async def _get_master(self, bucket: str, key: str) -> dict[str, Any] | None:
        assert self._db is not None
        async with self._db.execute(
            "SELECT record FROM object_masters WHERE bucket = ? AND key = ?",
            (bucket, key),
        ) as cursor:
            row = await cursor.fetchone()
            return json.loads(row["record"]) if row is not None else None

    async def _get_version(self, bucket: str, key: str, version_id: str) -> dict[str, Any] | None:
        assert self._db is not None
        async with self._db.execute(
            "SELECT record FROM object_versions WHERE bucket = ? AND key = ? AND version_id = ?",
            (bucket, key, version_id),
        ) as cursor:
            row = await cursor.fetchone()
            return json.loads(row["record"]) if row is not None else None

    async def _write_master(self, bucket: str, key: str, record: dict[str, Any]) -> None:
        assert self._db is not None
        await self._db.execute(
            """INSERT OR REPLACE INTO object_masters (bucket, key, version_id, record, updated_at)
               VALUES (?, ?, ?, ?, ?)""",
            (bucket, key, record.get("versionId"), _dump(record), _now_iso()),
        )

    async def _write_version(self, bucket: str, key: str, record: dict[str, Any]) -> None:
        assert self._db is not None
        await self._db.execute(
            """INSERT OR REPLACE INTO object_versions (bucket, key, version_id, record, updated_at)
               VALUES (?, ?, ?, ?, ?)""",
            (bucket, key, record["versionId"], _dump(record), _now_iso()),
        )

    # -- Object operations -----------------------------------------------------

    async def get_object(
        self, bucket: str, key: str, version_id: str | None = None
    ) -> dict[str, Any]:
        """Retrieve a master or version record.

        Raises:
            NoSuchKey: If no such record exists.
        """
        if version_id is None:
            record = await self._get_master(bucket, key)
        else:
            record = await self._get_version(bucket, key, version_id)
            if record is None:
                master = await self._get_master(bucket, key)
                if master is not None and master.get("versionId") == version_id:
                    record = master
        if record is None:
            raise NoSuchKey(key)
        return record

    async def put_object(
        self,
        bucket: str,
        key: str,
        record: dict[str, Any],
        version_id: str | None = None,
        versioning: bool = False,
    ) -> str | None:
        """Write a master and/or version record.

        See ``MetadataStore.put_object`` for the addressing rules.
        """
        assert self._db is not None
        stored = dict(record)
        vid: str | None
        if versioning:
            vid = self._codec.generate()
            stored["versionId"] = vid
            await self._write_version(bucket, key, stored)
            await self._write_master(bucket, key, stored)
        elif version_id is None:
            vid = None
            stored.pop("versionId", None)
            await self._write_master(bucket, key, stored)
        elif version_id == "":
            vid = self._codec.generate()
            stored["versionId"] = vid
            await self._write_master(bucket, key, stored)
        else:
            vid = version_id
            stored["versionId"] = vid
            await self._write_version(bucket, key, stored)
            master = await self._get_master(bucket, key)
            if master is not None and master.get("versionId") == vid:
                await self._write_master(bucket, key, stored)
        await self._db.commit()
        return vid

    async def delete_object(
        self,
        bucket: str,
        key: str,
        version_id: str | None = None,
        replay_id: str | None = None,
    ) -> None:
        """Delete a master or version record.

        Raises:
            NoSuchKey: If no such record exists.
        """
        assert self._db is not None
        if replay_id:
            logger.debug("deleting version %s created by upload %s", version_id, replay_id)
        if version_id is None:
            cursor = await self._db.execute(
                "DELETE FROM object_masters WHERE bucket = ? AND key = ?", (bucket, key)
            )
            await self._db.commit()
            if cursor.rowcount == 0:
                raise NoSuchKey(key)
            return

        cursor = await self._db.execute(
            "DELETE FROM object_versions WHERE bucket = ? AND key = ? AND version_id = ?",
            (bucket, key, version_id),
        )
        removed = cursor.rowcount > 0

        cursor = await self._db.execute(
            "DELETE FROM object_masters WHERE bucket = ? AND key = ? AND version_id = ?",
            (bucket, key, version_id),
        )
        if cursor.rowcount > 0:
            removed = True
            async with self._db.execute(
                "SELECT record FROM object_versions WHERE bucket = ? AND key = ? "
                "ORDER BY version_id LIMIT 1",
                (bucket, key),
            ) as newest:
                row = await newest.fetchone()
            if row is not None:
                await self._write_master(bucket, key, json.loads(row["record"]))

        await self._db.commit()
        if not removed:
            raise NoSuchKey(key)

    async def list_versions(self, bucket: str, key: str) -> list[dict[str, Any]]:
        """List the version records of a key, newest first."""
        assert self._db is not None
        async with self._db.execute(
            "SELECT record FROM object_versions WHERE bucket = ? AND key = ? ORDER BY version_id",
            (bucket, key),
        ) as cursor:
            rows = await cursor.fetchall()
        return [json.loads(row["record"]) for row in rows]
