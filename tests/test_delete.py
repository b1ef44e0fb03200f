"""Tests for the DELETE versioning policy."""

import pytest

from versionkeeper.errors import NoSuchKey
from versionkeeper.versioning.delete import preprocess_versioning_delete
from versionkeeper.versioning.models import DeleteOptions, VersioningStatus

ENABLED = VersioningStatus.ENABLED


class TestUnconfiguredBucket:
    """Buckets that never had versioning configured."""

    def test_hard_delete(self):
        """Objects are deleted with their data, no version involved."""
        opts = preprocess_versioning_delete(None, {"versionId": "V1"}, "V1")
        assert opts == DeleteOptions(delete_data=True)

    def test_hard_delete_without_version(self):
        opts = preprocess_versioning_delete(None, {"location": "a"}, None)
        assert opts == DeleteOptions(delete_data=True)


class TestSpecificVersion:
    """A regular version id is requested."""

    def test_deletes_that_version(self):
        """The requested version is deleted with its data."""
        opts = preprocess_versioning_delete(ENABLED, {"versionId": "V2"}, "V1")
        assert opts == DeleteOptions(delete_data=True, version_id="V1")

    def test_replay_id_from_upload_id(self):
        """The record's upload id travels as replay id."""
        opts = preprocess_versioning_delete(ENABLED, {"versionId": "V1", "uploadId": "U1"}, "V1")
        assert opts.replay_id == "U1"

    def test_suspended_bucket(self):
        """Suspended buckets delete specific versions the same way."""
        opts = preprocess_versioning_delete("Suspended", {"versionId": "V2"}, "V1")
        assert opts == DeleteOptions(delete_data=True, version_id="V1")


class TestNullVersion:
    """The "null" version id is requested."""

    def test_unversioned_object(self):
        """An object that predates versioning is hard-deleted."""
        opts = preprocess_versioning_delete(ENABLED, {"location": "a", "uploadId": "U0"}, "null")
        assert opts == DeleteOptions(delete_data=True)

    def test_null_master(self):
        """A null master is deleted by its own version id."""
        record = {"versionId": "V1", "isNull": True, "uploadId": "U1"}
        opts = preprocess_versioning_delete(ENABLED, record, "null")
        assert opts == DeleteOptions(delete_data=True, version_id="V1", is_null=True, replay_id="U1")

    def test_referenced_null_version(self):
        """A null version referenced from the master is deleted."""
        record = {"versionId": "V2", "nullVersionId": "V1", "nullUploadId": "U1"}
        opts = preprocess_versioning_delete(ENABLED, record, "null")
        assert opts == DeleteOptions(delete_data=True, version_id="V1", replay_id="U1")

    def test_referenced_null_version_without_upload(self):
        record = {"versionId": "V2", "nullVersionId": "V1", "uploadId": "U2"}
        opts = preprocess_versioning_delete(ENABLED, record, "null")
        assert opts == DeleteOptions(delete_data=True, version_id="V1")

    def test_no_null_version(self):
        """Requesting a null version that does not exist fails with NoSuchKey."""
        with pytest.raises(NoSuchKey) as exc_info:
            preprocess_versioning_delete(ENABLED, {"versionId": "V2"}, "null")
        assert exc_info.value.http_status == 404
        assert exc_info.value.is_client_error


class TestNoVersionRequested:
    """No version id in the request: a delete marker is created instead."""

    def test_delete_marker(self):
        opts = preprocess_versioning_delete(ENABLED, {"versionId": "V2"}, None)
        assert opts == DeleteOptions()
        assert opts.creates_delete_marker
        assert opts.to_dict() == {}

    def test_delete_marker_without_master(self):
        """A missing master does not change the delete marker decision."""
        opts = preprocess_versioning_delete(ENABLED, None, None)
        assert opts.creates_delete_marker

    def test_empty_version_id(self):
        """An empty version id counts as no version requested."""
        opts = preprocess_versioning_delete(ENABLED, {"versionId": "V2"}, "")
        assert opts == DeleteOptions()
