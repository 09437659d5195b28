"""
In-memory stores, used by the example app and the test suite.
"""

import logging
import threading
from dataclasses import replace
from typing import Dict, List

from ..enums import FileStatus
from ..exceptions import DuplicateRecordError
from ..models import CustomExtension, FixedExtensionSetting, UploadedFile, utcnow
from .base import FileRecordStore, PolicyStore


logger = logging.getLogger(__name__)


class InMemoryPolicyStore(PolicyStore):
    """
    Thread-safe policy store backed by dictionaries.

    Records are copied on the way in and out so callers cannot mutate stored
    state without going through a ``save_*`` call.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._fixed: Dict[str, FixedExtensionSetting] = {}
        self._custom: Dict[int, CustomExtension] = {}
        self._next_fixed_id = 1
        self._next_custom_id = 1

    def find_fixed_extension(self, extension: str) -> FixedExtensionSetting | None:
        with self._lock:
            setting = self._fixed.get(extension)
            return replace(setting) if setting else None

    def find_all_fixed_extensions(self) -> List[FixedExtensionSetting]:
        with self._lock:
            return [replace(self._fixed[key]) for key in sorted(self._fixed)]

    def save_fixed_setting(self, setting: FixedExtensionSetting) -> FixedExtensionSetting:
        with self._lock:
            existing = self._fixed.get(setting.extension)
            if setting.id is None:
                if existing is not None:
                    raise DuplicateRecordError(
                        f"Fixed extension '{setting.extension}' already exists",
                        key=setting.extension,
                    )
                setting = replace(setting, id=self._next_fixed_id)
                self._next_fixed_id += 1
            stored = replace(setting)
            self._fixed[stored.extension] = stored
            return replace(stored)

    def find_custom_extension(self, extension: str) -> CustomExtension | None:
        with self._lock:
            for entry in self._custom.values():
                if entry.extension == extension:
                    return replace(entry)
            return None

    def find_custom_extension_by_id(self, extension_id: int) -> CustomExtension | None:
        with self._lock:
            entry = self._custom.get(extension_id)
            return replace(entry) if entry else None

    def find_all_custom_extensions(self) -> List[CustomExtension]:
        with self._lock:
            return [replace(self._custom[key]) for key in sorted(self._custom)]

    def count_custom_extensions(self) -> int:
        with self._lock:
            return len(self._custom)

    def save_custom_extension(self, entry: CustomExtension) -> CustomExtension:
        with self._lock:
            if any(
                stored.extension == entry.extension and stored.id != entry.id
                for stored in self._custom.values()
            ):
                raise DuplicateRecordError(
                    f"Custom extension '{entry.extension}' already exists",
                    key=entry.extension,
                )
            if entry.id is None:
                entry = replace(entry, id=self._next_custom_id)
                self._next_custom_id += 1
            stored = replace(entry)
            self._custom[stored.id] = stored
            return replace(stored)

    def delete_custom_extension(self, extension_id: int) -> None:
        with self._lock:
            self._custom.pop(extension_id, None)


class InMemoryFileRecordStore(FileRecordStore):
    """
    Thread-safe file metadata store.

    ``delete_file`` is a soft delete: the record stays listed with status
    ``DELETED`` and drops out of every active lookup.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._files: Dict[int, UploadedFile] = {}
        self._next_id = 1

    def save_file(self, record: UploadedFile) -> UploadedFile:
        with self._lock:
            if record.id is None:
                record = replace(record, id=self._next_id)
                self._next_id += 1
            stored = replace(record)
            self._files[stored.id] = stored
            return replace(stored)

    def find_file_by_id(self, file_id: int) -> UploadedFile | None:
        with self._lock:
            record = self._files.get(file_id)
            return replace(record) if record else None

    def _newest_first(self, records) -> List[UploadedFile]:
        return [replace(record) for record in sorted(records, key=lambda r: r.id, reverse=True)]

    def find_all_files(self) -> List[UploadedFile]:
        with self._lock:
            return self._newest_first(self._files.values())

    def find_files_by_extension(self, extension: str) -> List[UploadedFile]:
        with self._lock:
            return self._newest_first(
                r for r in self._files.values() if r.extension == extension
            )

    def find_files_by_status(self, status: FileStatus) -> List[UploadedFile]:
        with self._lock:
            return self._newest_first(r for r in self._files.values() if r.status == status)

    def find_active_files_by_extension(self, extension: str) -> List[UploadedFile]:
        with self._lock:
            return self._newest_first(
                r
                for r in self._files.values()
                if r.extension == extension and r.status == FileStatus.ACTIVE
            )

    def delete_file(self, record: UploadedFile) -> None:
        with self._lock:
            stored = self._files.get(record.id)
            if stored is None:
                logger.debug("Delete requested for unknown file record %s", record.id)
                return
            self._files[record.id] = replace(
                stored, status=FileStatus.DELETED, updated_at=utcnow()
            )
