"""Version id handling at the request/response boundary."""

from collections.abc import Mapping
from typing import Any

from versionkeeper.errors import InvalidArgument
from versionkeeper.version_id import VersionIdCodec, VersionIdDecodeError
from versionkeeper.versioning.delete import NULL_VERSION_ID
from versionkeeper.versioning.models import VersioningStatus, coerce_status


def decode_vid(version_id: str, codec: VersionIdCodec) -> str:
    """Decode a public version id, passing the literal ``"null"`` through.

    Raises:
        InvalidArgument: If the version id is malformed.
    """
    if version_id == NULL_VERSION_ID:
        return version_id
    try:
        return codec.decode(version_id)
    except VersionIdDecodeError as exc:
        raise InvalidArgument("Invalid version id specified") from exc


def decode_version_id(query: Mapping[str, str] | None, codec: VersionIdCodec) -> str | None:
    """Decode the ``versionId`` request query parameter, if one was sent.

    Raises:
        InvalidArgument: If the version id is malformed.
    """
    if not query or not query.get("versionId"):
        return None
    return decode_vid(query["versionId"], codec)


def get_version_id_res_header(
    status: VersioningStatus | str | None,
    record: dict[str, Any],
    codec: VersionIdCodec,
) -> str | None:
    """Return the ``x-amz-version-id`` response value for a record.

    None when versioning was never configured on the bucket, ``"null"`` for
    null and pre-versioning records, the encoded version id otherwise.
    """
    if coerce_status(status) is None:
        return None
    if record.get("isNull") or not record.get("versionId"):
        return NULL_VERSION_ID
    return codec.encode(record["versionId"])


def check_query_version_id(query: Mapping[str, str] | None) -> None:
    """Reject a ``versionId`` parameter on operations that do not take one.

    Raises:
        InvalidArgument: If the query carries a version id.
    """
    if query and "versionId" in query:
        raise InvalidArgument("This operation does not accept a version-id.")
