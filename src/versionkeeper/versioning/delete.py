"""DELETE versioning policy."""

from typing import Any

from versionkeeper import metrics
from versionkeeper.errors import NoSuchKey
from versionkeeper.versioning.models import DeleteOptions, VersioningStatus, coerce_status

NULL_VERSION_ID = "null"


def _decide(
    status: VersioningStatus | None,
    record: dict[str, Any],
    requested_version_id: str | None,
) -> tuple[str, DeleteOptions | None]:
    if status is None:
        return "unversioned", DeleteOptions(delete_data=True)

    if requested_version_id and requested_version_id != NULL_VERSION_ID:
        return "specific_version", DeleteOptions(
            delete_data=True,
            version_id=requested_version_id,
            replay_id=record.get("uploadId") or None,
        )

    if not requested_version_id:
        return "delete_marker", DeleteOptions()

    if record.get("versionId") is None:
        # unversioned objects have no replay id to reference
        return "null_unversioned", DeleteOptions(delete_data=True)

    if record.get("isNull"):
        return "null_master", DeleteOptions(
            delete_data=True,
            version_id=record["versionId"],
            is_null=True,
            replay_id=record.get("uploadId") or None,
        )

    if record.get("nullVersionId"):
        return "null_referenced", DeleteOptions(
            delete_data=True,
            version_id=record["nullVersionId"],
            replay_id=record.get("nullUploadId") or None,
        )

    return "no_null_version", None


def preprocess_versioning_delete(
    status: VersioningStatus | str | None,
    record: dict[str, Any] | None,
    requested_version_id: str | None,
) -> DeleteOptions:
    """Compute the versioning instructions for a DELETE.

    Args:
        status: Bucket versioning status, None if never configured.
        record: Metadata of the object's master version.
        requested_version_id: Decoded version id from the request, the
            literal ``"null"``, or None when no version was requested.

    Returns:
        The delete options. An empty ``DeleteOptions()`` tells the caller to
        create a delete marker instead of deleting data.

    Raises:
        NoSuchKey: If the null version was requested and there is none.
    """
    branch, options = _decide(coerce_status(status), record or {}, requested_version_id)
    metrics.record_decision("delete", branch)
    if options is None:
        raise NoSuchKey()
    return options
