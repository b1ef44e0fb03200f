"""Master state resolution."""

from typing import Any

from versionkeeper.versioning.models import MasterState


def normalize_location(location: Any) -> tuple[Any, ...] | None:
    """Return a record's ``location`` as a tuple, or None when it has none."""
    if not location:
        return None
    if isinstance(location, (list, tuple)):
        return tuple(location)
    return (location,)


def get_master_state(record: dict[str, Any] | None) -> MasterState:
    """Build the state of the master version from its metadata record.

    Args:
        record: The master's object metadata, or None if there is none.

    Returns:
        A MasterState; ``MasterState()`` (``exists=False``) when no record
        was given. The record is read, never modified.
    """
    if record is None:
        return MasterState()
    return MasterState(
        exists=True,
        version_id=record.get("versionId"),
        upload_id=record.get("uploadId"),
        is_null=record.get("isNull"),
        null_version_id=record.get("nullVersionId"),
        null_upload_id=record.get("nullUploadId"),
        obj_location=normalize_location(record.get("location")),
    )
