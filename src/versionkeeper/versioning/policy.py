"""PUT versioning policy.

Maps the master state of an object and its bucket's versioning status to
the metadata instructions for writing a new object record:

* ``options`` for the write itself,
* ``store_options`` when the current master must first be kept as a null
  version under its own version key,
* ``del_options`` when an older null version is superseded and must go.

Buckets that never had versioning configured do not reach this function;
see ``versioning_preprocessing``.
"""

from versionkeeper.versioning.models import (
    DelOptions,
    MasterState,
    PutOptions,
    StoreOptions,
    VersioningDecision,
    VersioningStatus,
    coerce_status,
)


def process_versioning_state(
    mst: MasterState,
    status: VersioningStatus | str,
    null_version_sentinel: str,
) -> VersioningDecision:
    """Compute the versioning instructions for a PUT.

    Args:
        mst: State of the master version, from ``get_master_state``.
        status: Bucket versioning status, Enabled or Suspended.
        null_version_sentinel: Reserved version id given to an unversioned
            master when it is kept as a null version.

    Returns:
        The decision bundle.
    """
    suspended = coerce_status(status) is VersioningStatus.SUSPENDED

    # object does not exist or predates versioning, or master is the null version
    if mst.version_id is None or mst.is_null:
        if suspended:
            # overwrite the master in place
            options = PutOptions(version_id="", is_null=True, data_to_delete=mst.obj_location)
            if mst.is_null:
                # the master is the null version being replaced
                return VersioningDecision(
                    options=options,
                    del_options=DelOptions(version_id=mst.version_id, replay_id=mst.upload_id or None),
                )
            return VersioningDecision(options=options)

        if not mst.exists:
            return VersioningDecision(options=PutOptions(versioning=True))

        # keep the current master as the null version under its own key
        version_id = mst.version_id if mst.is_null else null_version_sentinel
        # unversioned MPU objects have no replay id to carry over
        null_upload_id = mst.upload_id if mst.is_null and mst.upload_id else None
        return VersioningDecision(
            options=PutOptions(
                versioning=True,
                null_version_id=version_id,
                null_upload_id=null_upload_id,
            ),
            store_options=StoreOptions(version_id=version_id),
        )

    # master is a regular version
    if suspended:
        options = PutOptions(version_id="", is_null=True)
        if mst.null_version_id is None:
            return VersioningDecision(options=options)
        return VersioningDecision(
            options=options,
            del_options=DelOptions(
                version_id=mst.null_version_id,
                replay_id=mst.null_upload_id or None,
            ),
        )

    return VersioningDecision(
        options=PutOptions(
            versioning=True,
            null_version_id=mst.null_version_id,
            null_upload_id=mst.null_upload_id or None,
        )
    )
