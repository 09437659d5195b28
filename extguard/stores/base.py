"""
Store Interfaces Module

Abstract persistence and blob-storage boundaries consumed by the policy
engine and the storage service. Concrete stores must provide at least
read-committed consistency per call and enforce extension uniqueness
themselves, raising ``DuplicateRecordError`` on a clash.
"""

from abc import ABC, abstractmethod
from typing import List

from ..enums import FileStatus
from ..models import CustomExtension, FixedExtensionSetting, UploadedFile


class PolicyStore(ABC):
    """Persistence for fixed extension settings and custom extensions."""

    @abstractmethod
    def find_fixed_extension(self, extension: str) -> FixedExtensionSetting | None:
        """Return the fixed setting for a normalized token, if it is a fixed extension."""

    @abstractmethod
    def find_all_fixed_extensions(self) -> List[FixedExtensionSetting]:
        """Return every fixed setting ordered by extension."""

    @abstractmethod
    def save_fixed_setting(self, setting: FixedExtensionSetting) -> FixedExtensionSetting:
        """Insert or update a fixed setting and return the stored copy."""

    @abstractmethod
    def find_custom_extension(self, extension: str) -> CustomExtension | None:
        pass

    @abstractmethod
    def find_custom_extension_by_id(self, extension_id: int) -> CustomExtension | None:
        pass

    @abstractmethod
    def find_all_custom_extensions(self) -> List[CustomExtension]:
        """Return every custom extension in creation order."""

    @abstractmethod
    def count_custom_extensions(self) -> int:
        pass

    @abstractmethod
    def save_custom_extension(self, entry: CustomExtension) -> CustomExtension:
        """
        Persist a new custom extension.

        Raises:
            DuplicateRecordError: If the extension is already stored.
        """

    @abstractmethod
    def delete_custom_extension(self, extension_id: int) -> None:
        pass


class FileRecordStore(ABC):
    """Persistence for uploaded file metadata."""

    @abstractmethod
    def save_file(self, record: UploadedFile) -> UploadedFile:
        """Insert or update a file record and return the stored copy."""

    @abstractmethod
    def find_file_by_id(self, file_id: int) -> UploadedFile | None:
        pass

    @abstractmethod
    def find_all_files(self) -> List[UploadedFile]:
        """Return every record, newest first."""

    @abstractmethod
    def find_files_by_extension(self, extension: str) -> List[UploadedFile]:
        """Return records of any status with the given extension, newest first."""

    @abstractmethod
    def find_files_by_status(self, status: FileStatus) -> List[UploadedFile]:
        """Return records in the given status, newest first."""

    @abstractmethod
    def find_active_files_by_extension(self, extension: str) -> List[UploadedFile]:
        pass

    @abstractmethod
    def delete_file(self, record: UploadedFile) -> None:
        """Remove a record from the active set."""


class BlobStore(ABC):
    """Physical storage for upload bytes, addressed by relative path."""

    @abstractmethod
    def save(self, path: str, content: bytes) -> str:
        """Write ``content`` at ``path`` and return the path actually used."""

    @abstractmethod
    def read(self, path: str) -> bytes:
        pass

    @abstractmethod
    def delete(self, path: str) -> None:
        """Remove the blob at ``path``; a missing blob is not an error."""
