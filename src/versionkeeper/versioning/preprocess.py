"""Versioning preprocessing for object writes."""

import logging
from typing import Any

from versionkeeper import metrics
from versionkeeper.metadata.store import MetadataStore
from versionkeeper.version_id import VersionIdCodec
from versionkeeper.versioning.master import get_master_state
from versionkeeper.versioning.models import (
    PutOptions,
    VersioningDecision,
    VersioningStatus,
    coerce_status,
)
from versionkeeper.versioning.orchestrator import NullVersionOrchestrator
from versionkeeper.versioning.policy import process_versioning_state

logger = logging.getLogger(__name__)


def _branch(decision: VersioningDecision) -> str:
    if decision.store_options is not None:
        return "store_null_version"
    if decision.del_options is not None:
        return "retire_null_version"
    if decision.options.versioning:
        return "new_version"
    return "overwrite_master"


async def versioning_preprocessing(
    bucket: str,
    status: VersioningStatus | str | None,
    key: str,
    record: dict[str, Any] | None,
    store: MetadataStore,
    codec: VersionIdCodec,
    group_id: str,
) -> PutOptions:
    """Return the versioning options for writing a new object record.

    Stores the current master as a null version and deletes a superseded
    null version when the bucket's versioning state calls for it.

    Args:
        bucket: The bucket name.
        status: Bucket versioning status, None if never configured.
        key: The object key.
        record: Current master metadata of the object, if any.
        store: Metadata store the side effects are applied to.
        codec: Codec supplying the legacy null version sentinel.
        group_id: Replication group id the sentinel is derived from.

    Returns:
        The write options. ``data_to_delete`` lists data no longer referenced
        once the write completes; ``version_id=""`` overwrites the master;
        ``versioning=True`` creates a new version.

    Raises:
        InternalError: If a superseded null version could not be deleted.
    """
    mst = get_master_state(record)
    status = coerce_status(status)
    if status is None:
        metrics.record_decision("put", "unversioned")
        return PutOptions(data_to_delete=mst.obj_location)

    decision = process_versioning_state(mst, status, codec.reserved_infinite_id(group_id))
    metrics.record_decision("put", _branch(decision))
    logger.debug(
        "versioning decision %s",
        decision.to_dict(),
        extra={"method": "versioning_preprocessing", "bucket": bucket, "key": key},
    )
    return await NullVersionOrchestrator(store).apply(bucket, key, record, mst, decision)
