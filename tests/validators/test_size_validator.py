"""Tests for file size validator."""

import pytest

from extguard.exceptions import EmptyFileError, ErrorCode, FileSizeError
from extguard.validators.size_validator import FileSizeValidator


class TestFileSizeValidator:
    """Test FileSizeValidator class."""

    def test_accepts_regular_size(self, default_config):
        """Test that a normal size passes."""
        FileSizeValidator(default_config).validate_file_size(1024, "doc.txt")

    def test_accepts_exact_limit(self, small_config):
        """Test that the limit itself is allowed."""
        FileSizeValidator(small_config).validate_file_size(1024, "doc.txt")

    def test_rejects_one_byte_over_limit(self, small_config):
        """Test the upper boundary."""
        with pytest.raises(FileSizeError) as exc_info:
            FileSizeValidator(small_config).validate_file_size(1025, "doc.txt")

        error = exc_info.value
        assert error.error_code == ErrorCode.FILE_TOO_LARGE
        assert error.size == 1025
        assert error.max_size == 1024
        assert error.filename == "doc.txt"

    def test_rejects_empty(self, default_config):
        """Test that zero bytes is rejected."""
        with pytest.raises(EmptyFileError) as exc_info:
            FileSizeValidator(default_config).validate_file_size(0, "empty.txt")

        assert exc_info.value.message == "No file selected"
        assert exc_info.value.filename == "empty.txt"

    def test_default_limit_is_100mb(self, default_config):
        """Test the default ceiling."""
        validator = FileSizeValidator(default_config)
        validator.validate_file_size(100 * 1024 * 1024)

        with pytest.raises(FileSizeError):
            validator.validate_file_size(101 * 1024 * 1024)
