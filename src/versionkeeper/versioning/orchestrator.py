"""Execution of null version side effects against the metadata store.

A PUT decision may require up to two metadata operations before the new
object record is written:

1. store the current master as a null version under its own version key
   (``store_options``), so it survives the coming overwrite;
2. delete a null version the new write supersedes (``del_options``) and
   collect its data locations for reclaim.

The steps run strictly in order and the first unrecoverable failure aborts
the rest. The store step is never skipped over: if the protective copy
cannot be written, nothing is deleted.
"""

import logging
from dataclasses import replace
from enum import Enum
from typing import Any

from versionkeeper import metrics
from versionkeeper.errors import InternalError, NoSuchKey
from versionkeeper.logging_config import ObjectLogAdapter
from versionkeeper.metadata.store import MetadataStore
from versionkeeper.versioning.master import normalize_location
from versionkeeper.versioning.models import MasterState, PutOptions, VersioningDecision

logger = logging.getLogger(__name__)


class ApplyState(Enum):
    """Progress of one ``NullVersionOrchestrator.apply`` call."""

    INIT = "init"
    STORED = "stored"
    DELETED = "deleted"
    DONE = "done"
    FAILED = "failed"


class NullVersionOrchestrator:
    """Apply the store/delete part of a versioning decision.

    Attributes:
        store: The metadata store the side effects are applied to.
    """

    def __init__(self, store: MetadataStore) -> None:
        self.store = store

    async def apply(
        self,
        bucket: str,
        key: str,
        record: dict[str, Any] | None,
        mst: MasterState,
        decision: VersioningDecision,
    ) -> PutOptions:
        """Run the decision's side effects and return the final write options.

        Args:
            bucket: The bucket name.
            key: The object key.
            record: Current master metadata (source of the null version copy).
            mst: Master state derived from ``record``.
            decision: Output of ``process_versioning_state``.

        Returns:
            ``decision.options``, with ``data_to_delete`` replaced by the
            superseded null version's data when it was deleted here, or
            with None when a concurrent request had already deleted it.

        Raises:
            InternalError: If deleting the superseded null version failed for
                any reason other than it being already gone.
            Exception: Any failure of the protective store, unchanged.
        """
        log = ObjectLogAdapter(logger, bucket, key)
        steps = (
            (ApplyState.STORED, self._store_null_version),
            (ApplyState.DELETED, self._delete_null_version),
        )
        state = ApplyState.INIT
        options = decision.options
        try:
            for next_state, step in steps:
                options = await step(log, bucket, key, record, mst, decision, options)
                state = next_state
        except Exception:
            log.debug(
                "versioning preprocessing failed after state %s",
                state.value,
                extra={"outcome": ApplyState.FAILED.value},
            )
            raise
        log.debug("versioning preprocessing %s", ApplyState.DONE.value)
        return options

    async def _store_null_version(
        self,
        log: ObjectLogAdapter,
        bucket: str,
        key: str,
        record: dict[str, Any] | None,
        mst: MasterState,
        decision: VersioningDecision,
        options: PutOptions,
    ) -> PutOptions:
        store_options = decision.store_options
        if store_options is None:
            return options
        version_md = dict(record or {})
        version_md.update(versionId=store_options.version_id, isNull=store_options.is_null)
        try:
            await self.store.put_object(bucket, key, version_md, version_id=store_options.version_id)
        except Exception:
            log.debug(
                "error from metadata storing null version as new version",
                exc_info=True,
                extra={"version_id": store_options.version_id},
            )
            raise
        return options

    async def _null_version_data(
        self, bucket: str, key: str, version_id: str, mst: MasterState
    ) -> tuple[Any, ...] | None:
        """Locate the data held by the null version about to be deleted."""
        if version_id == mst.version_id:
            # the master's metadata is already at hand
            return mst.obj_location
        version_md = await self.store.get_object(bucket, key, version_id=version_id)
        return normalize_location(version_md.get("location"))

    async def _delete_null_version(
        self,
        log: ObjectLogAdapter,
        bucket: str,
        key: str,
        record: dict[str, Any] | None,
        mst: MasterState,
        decision: VersioningDecision,
        options: PutOptions,
    ) -> PutOptions:
        del_options = decision.del_options
        if del_options is None:
            return options
        log_extra = {"version_id": del_options.version_id}
        try:
            data_to_delete = await self._null_version_data(
                bucket, key, del_options.version_id, mst
            )
            await self.store.delete_object(
                bucket, key, version_id=del_options.version_id, replay_id=del_options.replay_id
            )
        except NoSuchKey:
            # a concurrent request already removed the null version and owns
            # the reclaim of its data
            log.warning("null version already deleted, proceeding with put", extra=log_extra)
            metrics.record_cleanup("already_gone")
            return replace(options, data_to_delete=None)
        except Exception as exc:
            log.warning(
                "unexpected error deleting null version metadata",
                exc_info=True,
                extra=log_extra,
            )
            metrics.record_cleanup("failed")
            raise InternalError() from exc
        metrics.record_cleanup("deleted")
        return replace(options, data_to_delete=data_to_delete)
