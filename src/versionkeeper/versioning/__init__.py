"""S3 versioning decisions: master state, PUT/DELETE policies and null version handling."""

from versionkeeper.versioning.delete import NULL_VERSION_ID, preprocess_versioning_delete
from versionkeeper.versioning.headers import (
    check_query_version_id,
    decode_version_id,
    decode_vid,
    get_version_id_res_header,
)
from versionkeeper.versioning.master import get_master_state
from versionkeeper.versioning.models import (
    DeleteOptions,
    DelOptions,
    MasterState,
    OverwriteOptions,
    PutOptions,
    StoreOptions,
    VersioningDecision,
    VersioningStatus,
)
from versionkeeper.versioning.orchestrator import NullVersionOrchestrator
from versionkeeper.versioning.overwrite import overwriting_versioning
from versionkeeper.versioning.policy import process_versioning_state
from versionkeeper.versioning.preprocess import versioning_preprocessing

__all__ = [
    "check_query_version_id",
    "decode_version_id",
    "decode_vid",
    "DeleteOptions",
    "DelOptions",
    "get_master_state",
    "get_version_id_res_header",
    "MasterState",
    "NULL_VERSION_ID",
    "NullVersionOrchestrator",
    "OverwriteOptions",
    "overwriting_versioning",
    "preprocess_versioning_delete",
    "process_versioning_state",
    "PutOptions",
    "StoreOptions",
    "versioning_preprocessing",
    "VersioningDecision",
    "VersioningStatus",
]
