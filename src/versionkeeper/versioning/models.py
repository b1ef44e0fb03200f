"""Data model types for versioning decisions.

Object metadata records themselves are plain dicts keyed by their durable
field names (``versionId``, ``isNull``, ``nullVersionId``, ...). Everything
derived from a record here is a frozen dataclass: decision functions build
new values and never mutate what the caller handed them.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any


class VersioningStatus(str, Enum):
    """Bucket versioning status. ``None`` stands for "never configured"."""

    ENABLED = "Enabled"
    SUSPENDED = "Suspended"


def coerce_status(status: VersioningStatus | str | None) -> VersioningStatus | None:
    """Normalize a raw bucket versioning status.

    Raises:
        ValueError: If the string is not a known status.
    """
    if status is None or isinstance(status, VersioningStatus):
        return status
    return VersioningStatus(status)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


class _Bundle:
    """Mixin rendering the set fields of a dataclass with durable names."""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, tuple):
                value = list(value)
            result[_camel(f.name)] = value
        return result


@dataclass(frozen=True)
class MasterState(_Bundle):
    """Normalized snapshot of an object's master version.

    Attributes:
        exists: Whether a master record existed at all.
        version_id: Internal version id of the master, None if unversioned.
        upload_id: Multipart upload id that created the master, if any.
        is_null: Whether the master is itself the null version.
        null_version_id: Version id of the null version a versioned master
            refers to.
        null_upload_id: Upload id of that referenced null version.
        obj_location: Data locations held by the master, always a tuple.
    """

    exists: bool = False
    version_id: str | None = None
    upload_id: str | None = None
    is_null: bool | None = None
    null_version_id: str | None = None
    null_upload_id: str | None = None
    obj_location: tuple[Any, ...] | None = None


@dataclass(frozen=True)
class PutOptions(_Bundle):
    """Instructions for the object write path.

    Attributes:
        version_id: Specific version key to write; ``""`` overwrites the
            master in place.
        is_null: Whether the record being written is a null version.
        versioning: Ask the metadata layer to create a new version.
        null_version_id: Null version the new master must refer to.
        null_upload_id: Upload id of that null version.
        data_to_delete: Data locations orphaned by the write.
    """

    version_id: str | None = None
    is_null: bool | None = None
    versioning: bool | None = None
    null_version_id: str | None = None
    null_upload_id: str | None = None
    data_to_delete: tuple[Any, ...] | None = None


@dataclass(frozen=True)
class StoreOptions(_Bundle):
    """Persist the current master as a retired null version."""

    version_id: str
    is_null: bool = True


@dataclass(frozen=True)
class DelOptions(_Bundle):
    """Delete a superseded null version's metadata."""

    version_id: str
    replay_id: str | None = None


@dataclass(frozen=True)
class VersioningDecision:
    """Result of the PUT versioning policy."""

    options: PutOptions
    store_options: StoreOptions | None = None
    del_options: DelOptions | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"options": self.options.to_dict()}
        if self.store_options is not None:
            result["storeOptions"] = self.store_options.to_dict()
        if self.del_options is not None:
            result["delOptions"] = self.del_options.to_dict()
        return result


@dataclass(frozen=True)
class DeleteOptions(_Bundle):
    """Instructions for the object delete path.

    An empty value (``delete_data`` unset) means no data is deleted and the
    caller creates a delete marker instead.
    """

    delete_data: bool | None = None
    version_id: str | None = None
    is_null: bool | None = None
    replay_id: str | None = None

    @property
    def creates_delete_marker(self) -> bool:
        return not self.delete_data


@dataclass(frozen=True)
class OverwriteOptions(_Bundle):
    """Version addressing for an in-place overwrite of an existing version."""

    version_id: str | None = None
    is_null: bool | None = None
    null_version_id: str | None = None
