"""In-place overwrite of an existing version's metadata.

Used when a restore from an archive completes: the restored data is written
back under the same version id, so only the microversion id changes.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from versionkeeper.versioning.models import OverwriteOptions


def overwriting_versioning(
    record: dict[str, Any],
    params: dict[str, Any],
    now: datetime | None = None,
) -> tuple[dict[str, Any], OverwriteOptions]:
    """Compute write parameters for overwriting an identified version.

    Args:
        record: Current metadata of the version being overwritten.
        params: Write parameters built by the caller. Not modified.
        now: Completion time of the restore, defaults to the current UTC time.

    Returns:
        A ``(params, options)`` pair: a copy of ``params`` carrying the
        record's timestamps, a microversion bump and refreshed archive
        fields, and the version addressing to write under.

    Raises:
        ValueError: If the record's archive has no ``restoreRequestedDays``.
    """
    archive = record.get("archive") or {}
    days = archive.get("restoreRequestedDays")
    if days is None:
        raise ValueError("cannot overwrite a version without restoreRequestedDays")
    if now is None:
        now = datetime.now(timezone.utc)

    new_params = dict(params)
    new_params["creationTime"] = record.get("creation-time")
    new_params["lastModifiedDate"] = record.get("last-modified")
    new_params["updateMicroVersionId"] = True
    new_params["archive"] = {
        "archiveInfo": archive.get("archiveInfo"),
        "restoreRequestedAt": archive.get("restoreRequestedAt"),
        "restoreRequestedDays": days,
        "restoreCompletedAt": now,
        "restoreWillExpireAt": now + timedelta(days=days),
    }

    options = OverwriteOptions(
        version_id=record.get("versionId") or None,
        is_null=record.get("isNull"),
        null_version_id=record.get("nullVersionId"),
    )
    return new_params, options
