"""
Extension Guard Exceptions Module

Contains all exception classes used by the extension policy system.
"""

from typing import List
from dataclasses import dataclass


class ErrorCode:
    """String constants identifying each failure, stable across releases."""

    # Structural upload errors
    FILENAME_INVALID = "FILENAME_INVALID"
    FILE_EMPTY = "FILE_EMPTY"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"

    # Policy administration errors
    EXTENSION_NOT_FOUND = "EXTENSION_NOT_FOUND"
    EXTENSION_ALREADY_EXISTS = "EXTENSION_ALREADY_EXISTS"
    EXTENSION_CONFLICT = "EXTENSION_CONFLICT"
    EXTENSION_LIMIT_EXCEEDED = "EXTENSION_LIMIT_EXCEEDED"
    EXTENSION_INVALID = "EXTENSION_INVALID"

    # File management and storage errors
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    STORAGE_ERROR = "STORAGE_ERROR"
    DUPLICATE_RECORD = "DUPLICATE_RECORD"


class ExtGuardError(Exception):
    """
    Base class for every error raised by extguard.

    Args:
        message (str): Human-readable description, surfaced verbatim to callers.
        error_code (str | None): One of the :class:`ErrorCode` constants.
    """

    def __init__(self, message: str, error_code: str | None = None):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class FileValidationError(ExtGuardError):
    """Structural problem with an upload (caller error, never a policy decision)."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        filename: str | None = None,
    ):
        super().__init__(message, error_code)
        self.filename = filename


class FilenameError(FileValidationError):
    """Raised when an upload has no usable filename."""

    def __init__(self, message: str = "Invalid filename", filename: str | None = None):
        super().__init__(message, ErrorCode.FILENAME_INVALID, filename)


class EmptyFileError(FileValidationError):
    """Raised when an upload carries zero bytes."""

    def __init__(self, message: str = "No file selected", filename: str | None = None):
        super().__init__(message, ErrorCode.FILE_EMPTY, filename)


class FileSizeError(FileValidationError):
    """
    Raised when an upload exceeds the configured size ceiling.

    Attributes:
        size (int | None): Detected size in bytes.
        max_size (int | None): Configured maximum in bytes.
    """

    def __init__(
        self,
        message: str = "File size exceeds the maximum allowed size",
        filename: str | None = None,
        size: int | None = None,
        max_size: int | None = None,
    ):
        super().__init__(message, ErrorCode.FILE_TOO_LARGE, filename)
        self.size = size
        self.max_size = max_size


class ExtensionPolicyError(ExtGuardError):
    """Administrative error raised by policy mutations."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        extension: str | None = None,
    ):
        super().__init__(message, error_code)
        self.extension = extension


class ExtensionNotFoundError(ExtensionPolicyError):
    """Raised for an unknown fixed extension or custom extension id."""

    def __init__(self, message: str, extension: str | None = None):
        super().__init__(message, ErrorCode.EXTENSION_NOT_FOUND, extension)


class ExtensionAlreadyExistsError(ExtensionPolicyError):
    def __init__(self, extension: str):
        super().__init__(
            f"Extension '{extension}' is already registered",
            ErrorCode.EXTENSION_ALREADY_EXISTS,
            extension,
        )


class ExtensionConflictError(ExtensionPolicyError):
    def __init__(self, extension: str):
        super().__init__(
            f"Extension '{extension}' is a fixed extension; toggle it instead of adding it",
            ErrorCode.EXTENSION_CONFLICT,
            extension,
        )


class ExtensionLimitExceededError(ExtensionPolicyError):
    """
    Raised when the custom extension list is already at capacity.

    Attributes:
        limit (int): The configured maximum number of custom extensions.
    """

    def __init__(self, extension: str, limit: int):
        super().__init__(
            f"Custom extensions are limited to {limit} entries",
            ErrorCode.EXTENSION_LIMIT_EXCEEDED,
            extension,
        )
        self.limit = limit


class InvalidExtensionError(ExtensionPolicyError):
    def __init__(self, message: str, extension: str | None = None):
        super().__init__(message, ErrorCode.EXTENSION_INVALID, extension)


class FileRecordNotFoundError(ExtGuardError):
    def __init__(self, file_id: int):
        super().__init__(f"File {file_id} not found", ErrorCode.FILE_NOT_FOUND)
        self.file_id = file_id


class StorageError(ExtGuardError):
    """Raised when the blob store cannot persist or read an upload."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.STORAGE_ERROR)


class DuplicateRecordError(ExtGuardError):
    """
    Raised by a store when a write violates a uniqueness constraint.

    The policy engine translates this into :class:`ExtensionAlreadyExistsError`
    so concurrent adds of the same token fail the same way as sequential ones.
    """

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message, ErrorCode.DUPLICATE_RECORD)
        self.key = key


@dataclass
class ConfigValidationError:
    """
    Represents a configuration validation issue, including details about its
    type, severity, component, and an optional recommendation.
    """

    error_type: str
    message: str
    severity: str  # 'error', 'warning', 'info'
    component: str
    recommendation: str = ""


class ExtGuardConfigurationError(Exception):
    """
    Exception raised when configuration validation fails, aggregating all collected errors.

    Args:
        errors (List[ConfigValidationError]): Sequence of configuration validation errors that caused the failure.
    """

    def __init__(self, errors: List[ConfigValidationError]):
        """
        Initialize the exception with validation errors.

        Args:
            errors (List[ConfigValidationError]): Collected configuration validation errors whose messages will be aggregated.

        """
        self.errors = errors
        error_messages = [
            f"{error.severity.upper()}: {error.message}" for error in errors
        ]
        super().__init__(
            f"Configuration validation failed: {'; '.join(error_messages)}"
        )
