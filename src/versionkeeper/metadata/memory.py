"""In-memory versioned metadata store for versionkeeper.

Useful for testing and ephemeral deployments. Data is lost on restart.
"""

import copy
from typing import Any

from versionkeeper.errors import NoSuchKey
from versionkeeper.version_id import VersionIdCodec


class MemoryMetadataStore:
    """In-memory metadata store using Python dicts.

    Records are deep-copied on the way in and out so callers never share
    state with the store.
    """

    def __init__(self, codec: VersionIdCodec) -> None:
        self._codec = codec
        self._masters: dict[tuple[str, str], dict[str, Any]] = {}
        self._versions: dict[tuple[str, str], dict[str, dict[str, Any]]] = {}

    async def init_db(self) -> None:
        pass

    async def close(self) -> None:
        self._masters.clear()
        self._versions.clear()

    async def get_object(
        self, bucket: str, key: str, version_id: str | None = None
    ) -> dict[str, Any]:
        if version_id is None:
            record = self._masters.get((bucket, key))
        else:
            record = self._versions.get((bucket, key), {}).get(version_id)
            if record is None:
                master = self._masters.get((bucket, key))
                # a null master written in place has no version key
                if master is not None and master.get("versionId") == version_id:
                    record = master
        if record is None:
            raise NoSuchKey(key)
        return copy.deepcopy(record)

    async def put_object(
        self,
        bucket: str,
        key: str,
        record: dict[str, Any],
        version_id: str | None = None,
        versioning: bool = False,
    ) -> str | None:
        stored = copy.deepcopy(record)
        if versioning:
            vid = self._codec.generate()
            stored["versionId"] = vid
            self._versions.setdefault((bucket, key), {})[vid] = stored
            self._masters[(bucket, key)] = copy.deepcopy(stored)
            return vid
        if version_id is None:
            stored.pop("versionId", None)
            self._masters[(bucket, key)] = stored
            return None
        if version_id == "":
            vid = self._codec.generate()
            stored["versionId"] = vid
            self._masters[(bucket, key)] = stored
            return vid
        stored["versionId"] = version_id
        self._versions.setdefault((bucket, key), {})[version_id] = stored
        master = self._masters.get((bucket, key))
        if master is not None and master.get("versionId") == version_id:
            self._masters[(bucket, key)] = copy.deepcopy(stored)
        return version_id

    async def delete_object(
        self,
        bucket: str,
        key: str,
        version_id: str | None = None,
        replay_id: str | None = None,
    ) -> None:
        if version_id is None:
            if self._masters.pop((bucket, key), None) is None:
                raise NoSuchKey(key)
            return

        versions = self._versions.get((bucket, key), {})
        removed = versions.pop(version_id, None)
        master = self._masters.get((bucket, key))
        if master is not None and master.get("versionId") == version_id:
            del self._masters[(bucket, key)]
            if versions:
                newest = min(versions)
                self._masters[(bucket, key)] = copy.deepcopy(versions[newest])
            removed = removed or master
        if removed is None:
            raise NoSuchKey(key)
        if not versions:
            self._versions.pop((bucket, key), None)

    async def list_versions(self, bucket: str, key: str) -> list[dict[str, Any]]:
        versions = self._versions.get((bucket, key), {})
        return [copy.deepcopy(versions[vid]) for vid in sorted(versions)]
