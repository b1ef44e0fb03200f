"""Tests for master state resolution."""

import copy

from versionkeeper.versioning.master import get_master_state, normalize_location
from versionkeeper.versioning.models import MasterState


class TestGetMasterState:
    """Tests for get_master_state()."""

    def test_no_record(self):
        """A missing record yields the empty, non-existing state."""
        mst = get_master_state(None)
        assert mst == MasterState()
        assert mst.exists is False
        assert mst.version_id is None
        assert mst.obj_location is None

    def test_copies_identifier_fields(self):
        """Version and upload identifiers are copied verbatim."""
        record = {
            "versionId": "V2",
            "uploadId": "U2",
            "isNull": False,
            "nullVersionId": "V1",
            "nullUploadId": "U1",
            "location": ["a"],
        }
        mst = get_master_state(record)
        assert mst.exists is True
        assert mst.version_id == "V2"
        assert mst.upload_id == "U2"
        assert mst.is_null is False
        assert mst.null_version_id == "V1"
        assert mst.null_upload_id == "U1"

    def test_single_location_normalized(self):
        """A single location becomes a one-element sequence."""
        mst = get_master_state({"location": {"key": "blk-1"}})
        assert mst.obj_location == ({"key": "blk-1"},)

    def test_list_location_unchanged(self):
        """A list location keeps its items and order."""
        mst = get_master_state({"location": ["a", "b", "c"]})
        assert list(mst.obj_location) == ["a", "b", "c"]

    def test_no_location(self):
        """A record without location leaves obj_location unset."""
        mst = get_master_state({"versionId": "V1"})
        assert mst.exists is True
        assert mst.obj_location is None

    def test_empty_record_exists(self):
        """An empty record still counts as an existing master."""
        assert get_master_state({}).exists is True

    def test_unversioned_record(self):
        """A record without versionId has no version id in its state."""
        mst = get_master_state({"location": "a"})
        assert mst.version_id is None
        assert mst.is_null is None

    def test_idempotent_and_input_untouched(self):
        """Resolving twice gives equal states and does not modify the record."""
        record = {"versionId": "V1", "isNull": True, "location": ["a", "b"]}
        snapshot = copy.deepcopy(record)
        assert get_master_state(record) == get_master_state(record)
        assert record == snapshot

    def test_to_dict(self):
        """The state renders with durable field names, skipping unset ones."""
        mst = get_master_state({"versionId": "V1", "location": "a"})
        assert mst.to_dict() == {"exists": True, "versionId": "V1", "objLocation": ["a"]}


class TestNormalizeLocation:
    """Tests for normalize_location()."""

    def test_none(self):
        assert normalize_location(None) is None

    def test_empty_list(self):
        assert normalize_location([]) is None

    def test_string(self):
        assert normalize_location("a") == ("a",)
