"""Tests for the local blob store."""

import pytest

from extguard.exceptions import StorageError
from extguard.stores import LocalBlobStore


class TestLocalBlobStore:
    """Test LocalBlobStore class."""

    def test_save_and_read(self, blob_store):
        """Test writing and reading a blob."""
        path = blob_store.save("abc.txt", b"hello")

        assert path == "abc.txt"
        assert blob_store.read("abc.txt") == b"hello"
        assert (blob_store.root / "abc.txt").read_bytes() == b"hello"

    def test_root_created_on_demand(self, tmp_path):
        """Test that the root directory is created by the first save."""
        store = LocalBlobStore(tmp_path / "a" / "b")

        store.save("nested/file.bin", b"\x00\x01")

        assert (tmp_path / "a" / "b" / "nested" / "file.bin").exists()

    def test_delete(self, blob_store):
        """Test deleting a blob."""
        blob_store.save("abc.txt", b"hello")

        blob_store.delete("abc.txt")

        assert not (blob_store.root / "abc.txt").exists()

    def test_delete_missing_blob_is_noop(self, blob_store):
        """Test that deleting a missing blob does not raise."""
        blob_store.delete("missing.txt")

    def test_read_missing_blob(self, blob_store):
        """Test that reading a missing blob raises StorageError."""
        with pytest.raises(StorageError):
            blob_store.read("missing.txt")

    @pytest.mark.parametrize(
        "path", ["../escape.txt", "../../etc/passwd", "sub/../../escape.txt"]
    )
    def test_path_traversal_rejected(self, blob_store, path):
        """Test that paths escaping the root are rejected."""
        with pytest.raises(StorageError) as exc_info:
            blob_store.save(path, b"data")

        assert "Path traversal detected" in exc_info.value.message
