"""Abstract versioned metadata store protocol for versionkeeper."""

from typing import Any, Protocol


class MetadataStore(Protocol):
    """Protocol defining the versioned object metadata interface.

    Every object key has at most one *master* record (what a read without a
    version id returns) and any number of *version* records keyed by
    internal version id. Records are plain dicts using the durable field
    names (``versionId``, ``isNull``, ``nullVersionId``, ``location``, ...).
    """

    async def init_db(self) -> None:
        """Initialize the backing storage. Must be idempotent."""
        ...

    async def close(self) -> None:
        """Release resources held by the store."""
        ...

    async def get_object(
        self, bucket: str, key: str, version_id: str | None = None
    ) -> dict[str, Any]:
        """Retrieve an object metadata record.

        Args:
            bucket: The bucket name.
            key: The object key.
            version_id: Internal version id, or None for the master.

        Returns:
            A copy of the stored record.

        Raises:
            NoSuchKey: If no such record exists.
        """
        ...

    async def put_object(
        self,
        bucket: str,
        key: str,
        record: dict[str, Any],
        version_id: str | None = None,
        versioning: bool = False,
    ) -> str | None:
        """Write an object metadata record.

        Args:
            bucket: The bucket name.
            key: The object key.
            record: The metadata to store.
            version_id: ``None`` writes the master without a version id;
                ``""`` overwrites the master in place under a freshly
                generated version id and no version key; any other value
                writes that version key, and the master too when the master
                currently is that version.
            versioning: Generate a new version id and write the record both
                as that version and as the master.

        Returns:
            The version id the record was stored under, if any.
        """
        ...

    async def delete_object(
        self,
        bucket: str,
        key: str,
        version_id: str | None = None,
        replay_id: str | None = None,
    ) -> None:
        """Delete an object metadata record.

        Deleting the version the master currently points to also removes
        the master, promoting the newest remaining version if there is one.

        Args:
            bucket: The bucket name.
            key: The object key.
            version_id: Internal version id, or None for the master.
            replay_id: Upload id of the multipart upload that created the
                version, so its bookkeeping can be cleaned up with it.

        Raises:
            NoSuchKey: If no such record exists.
        """
        ...

    async def list_versions(self, bucket: str, key: str) -> list[dict[str, Any]]:
        """List the version records of a key, newest first."""
        ...
