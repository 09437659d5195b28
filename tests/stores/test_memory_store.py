"""Tests for the in-memory stores."""

import threading

import pytest

from extguard.enums import FileStatus
from extguard.exceptions import DuplicateRecordError
from extguard.models import CustomExtension, FixedExtensionSetting


class TestInMemoryPolicyStore:
    """Test InMemoryPolicyStore class."""

    def test_save_and_find_fixed_setting(self, policy_store):
        """Test that new fixed settings get an id and can be found."""
        saved = policy_store.save_fixed_setting(FixedExtensionSetting("exe", True))

        assert saved.id is not None
        assert policy_store.find_fixed_extension("exe").is_blocked is True
        assert policy_store.find_fixed_extension("bat") is None

    def test_duplicate_fixed_insert_rejected(self, policy_store):
        """Test that the extension key is unique among fixed settings."""
        policy_store.save_fixed_setting(FixedExtensionSetting("exe"))

        with pytest.raises(DuplicateRecordError) as exc_info:
            policy_store.save_fixed_setting(FixedExtensionSetting("exe"))

        assert exc_info.value.key == "exe"

    def test_update_fixed_setting(self, policy_store):
        """Test that saving a stored setting updates it in place."""
        saved = policy_store.save_fixed_setting(FixedExtensionSetting("exe"))
        saved.is_blocked = True

        policy_store.save_fixed_setting(saved)

        assert policy_store.find_fixed_extension("exe").is_blocked is True
        assert len(policy_store.find_all_fixed_extensions()) == 1

    def test_fixed_settings_sorted_by_extension(self, policy_store):
        """Test that fixed settings are listed alphabetically."""
        for extension in ("scr", "bat", "exe"):
            policy_store.save_fixed_setting(FixedExtensionSetting(extension))

        names = [s.extension for s in policy_store.find_all_fixed_extensions()]
        assert names == ["bat", "exe", "scr"]

    def test_returned_records_are_copies(self, policy_store):
        """Test that mutating a returned record does not change the store."""
        policy_store.save_fixed_setting(FixedExtensionSetting("exe"))

        policy_store.find_fixed_extension("exe").is_blocked = True

        assert policy_store.find_fixed_extension("exe").is_blocked is False

    def test_custom_extension_lifecycle(self, policy_store):
        """Test adding, finding, counting and deleting custom extensions."""
        first = policy_store.save_custom_extension(CustomExtension("sh"))
        second = policy_store.save_custom_extension(CustomExtension("ps1"))

        assert policy_store.count_custom_extensions() == 2
        assert policy_store.find_custom_extension("sh").id == first.id
        assert policy_store.find_custom_extension_by_id(second.id).extension == "ps1"
        assert [e.extension for e in policy_store.find_all_custom_extensions()] == [
            "sh",
            "ps1",
        ]

        policy_store.delete_custom_extension(first.id)

        assert policy_store.find_custom_extension("sh") is None
        assert policy_store.count_custom_extensions() == 1

    def test_duplicate_custom_extension_rejected(self, policy_store):
        """Test that custom extensions are unique."""
        policy_store.save_custom_extension(CustomExtension("sh"))

        with pytest.raises(DuplicateRecordError):
            policy_store.save_custom_extension(CustomExtension("sh"))

    def test_delete_unknown_custom_extension_is_noop(self, policy_store):
        """Test that deleting a missing id does nothing."""
        policy_store.delete_custom_extension(42)
        assert policy_store.count_custom_extensions() == 0

    def test_concurrent_inserts_keep_uniqueness(self, policy_store):
        """Test that racing inserts of the same token store it once."""
        failures = []

        def add():
            try:
                policy_store.save_custom_extension(CustomExtension("sh"))
            except DuplicateRecordError:
                failures.append(True)

        threads = [threading.Thread(target=add) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert policy_store.count_custom_extensions() == 1
        assert len(failures) == 9


class TestInMemoryFileRecordStore:
    """Test InMemoryFileRecordStore class."""

    def test_save_assigns_ids(self, file_store, make_file_record):
        """Test that ids are assigned on first save."""
        first = file_store.save_file(make_file_record("txt"))
        second = file_store.save_file(make_file_record("pdf"))

        assert first.id == 1
        assert second.id == 2

    def test_newest_first(self, file_store, make_file_record):
        """Test that listings are newest first."""
        first = file_store.save_file(make_file_record("txt"))
        second = file_store.save_file(make_file_record("txt"))

        assert [f.id for f in file_store.find_all_files()] == [second.id, first.id]
        assert [f.id for f in file_store.find_files_by_extension("txt")] == [
            second.id,
            first.id,
        ]

    def test_delete_is_soft(self, file_store, make_file_record):
        """Test that deleted records stay listed with DELETED status."""
        record = file_store.save_file(make_file_record("exe"))

        file_store.delete_file(record)

        stored = file_store.find_file_by_id(record.id)
        assert stored.status == FileStatus.DELETED
        assert file_store.find_active_files_by_extension("exe") == []
        assert [f.id for f in file_store.find_files_by_status(FileStatus.DELETED)] == [
            record.id
        ]

    def test_delete_unknown_record_is_noop(self, file_store, make_file_record):
        """Test that deleting an unsaved record does nothing."""
        record = make_file_record("exe")
        record.id = 99

        file_store.delete_file(record)

        assert file_store.find_all_files() == []

    def test_active_lookup_filters_extension(self, file_store, make_file_record):
        """Test that active lookups match the extension exactly."""
        exe = file_store.save_file(make_file_record("exe"))
        file_store.save_file(make_file_record("txt"))

        assert [f.id for f in file_store.find_active_files_by_extension("exe")] == [exe.id]
