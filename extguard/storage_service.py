"""
Storage Service Module

Persists accepted uploads, manages their metadata and performs the cascading
deletion triggered when an extension becomes blocked.
"""

import logging
import mimetypes
import uuid
from typing import List, Tuple

import magic
from fastapi import UploadFile

from .config import ExtGuardConfig
from .enums import FileStatus
from .exceptions import (
    EmptyFileError,
    FilenameError,
    FileRecordNotFoundError,
    FileSizeError,
)
from .extensions import normalize_extension, primary_extension
from .models import UploadedFile, utcnow
from .stores.base import BlobStore, FileRecordStore


logger = logging.getLogger(__name__)


class StorageService:
    """
    Coordinates the file metadata store and the blob store.

    Attributes:
        file_store (FileRecordStore): Metadata persistence.
        blob_store (BlobStore): Physical byte storage.
        config (ExtGuardConfig): Limits applied when storing.
        magic_mime (magic.Magic | None): MIME detector based on python-magic, when available.
        magic_available (bool): Indicates whether python-magic was successfully initialized.
    """

    def __init__(
        self,
        file_store: FileRecordStore,
        blob_store: BlobStore,
        config: ExtGuardConfig | None = None,
    ):
        self.file_store = file_store
        self.blob_store = blob_store
        self.config = config or ExtGuardConfig()

        # Content type is recorded as metadata only, never used for policy decisions
        try:
            self.magic_mime = magic.Magic(mime=True)
            self.magic_available = True
            logger.debug("File content detection (python-magic) initialized")
        except Exception as err:
            self.magic_mime = None
            self.magic_available = False
            logger.warning(
                "python-magic not available for content detection: %s",
                err,
            )

    def _detect_content_type(self, content: bytes, filename: str) -> str:
        """
        Determine the content type, preferring python-magic and falling back to the filename.

        Args:
            content (bytes): Leading bytes of the upload.
            filename (str): Original filename, used for fallback detection.

        Returns:
            str: The detected MIME type or "application/octet-stream".
        """
        detected_mime = None

        if self.magic_available:
            try:
                detected_mime = self.magic_mime.from_buffer(content)
            except Exception as err:
                logger.warning("Magic MIME detection failed: %s", err)

        if not detected_mime:
            detected_mime, _ = mimetypes.guess_type(filename)

        return detected_mime or "application/octet-stream"

    async def store_file(self, file: UploadFile) -> UploadedFile:
        """
        Write an accepted upload to the blob store and record its metadata.

        The caller is expected to have validated the file against policy first;
        only the structural checks are repeated here.

        Args:
            file (UploadFile): The upload to persist.

        Returns:
            UploadedFile: The stored record, status ``ACTIVE``.

        Raises:
            FilenameError: If the upload has no filename.
            EmptyFileError: If the upload carries no bytes.
            FileSizeError: If the upload exceeds the size limit.
            StorageError: If the blob store cannot write the bytes.
        """
        filename = file.filename
        if not filename:
            raise FilenameError()

        await file.seek(0)
        content = await file.read()
        await file.seek(0)

        max_size = self.config.limits.max_file_size
        if not content:
            raise EmptyFileError("Empty files cannot be stored", filename=filename)
        if len(content) > max_size:
            raise FileSizeError(
                filename=filename, size=len(content), max_size=max_size
            )

        extension = primary_extension(filename)
        stored_filename = f"{uuid.uuid4().hex}.{extension}" if extension else uuid.uuid4().hex
        file_path = self.blob_store.save(stored_filename, content)

        content_type = self._detect_content_type(
            content[: self.config.limits.size_probe_bytes], filename
        )

        try:
            record = self.file_store.save_file(
                UploadedFile(
                    original_filename=filename,
                    stored_filename=stored_filename,
                    file_path=file_path,
                    extension=extension,
                    file_size=len(content),
                    content_type=content_type,
                )
            )
        except Exception:
            self.blob_store.delete(file_path)
            raise

        logger.info(
            "File stored: %s as %s (%s, %s bytes)",
            filename,
            stored_filename,
            content_type,
            len(content),
        )
        return record

    def delete_files_by_extension(self, extension: str) -> None:
        """
        Delete every active, unprotected stored file with the given extension.

        Files flagged with ``deletion_exception`` are skipped. A failure on one
        file is logged and the remaining files are still processed.

        Args:
            extension (str): Extension that has just become blocked.
        """
        token = normalize_extension(extension)
        files = self.file_store.find_active_files_by_extension(token)

        deleted = 0
        skipped = 0
        failed = 0
        for record in files:
            if record.deletion_exception:
                skipped += 1
                logger.info(
                    "Skipping protected file %s (%s)", record.id, record.original_filename
                )
                continue

            try:
                self.file_store.delete_file(record)
                self.blob_store.delete(record.file_path)
                deleted += 1
            except Exception as err:
                failed += 1
                logger.exception(
                    "Failed to delete file %s (%s): %s",
                    record.id,
                    record.original_filename,
                    err,
                )

        logger.info(
            "Cascading deletion for .%s: %s deleted, %s protected, %s failed",
            token,
            deleted,
            skipped,
            failed,
        )

    def find_by_id(self, file_id: int) -> UploadedFile | None:
        return self.file_store.find_file_by_id(file_id)

    def get_all_files(self) -> List[UploadedFile]:
        return self.file_store.find_all_files()

    def get_files_by_extension(self, extension: str) -> List[UploadedFile]:
        return self.file_store.find_files_by_extension(normalize_extension(extension))

    def get_files_by_status(self, status: FileStatus) -> List[UploadedFile]:
        return self.file_store.find_files_by_status(status)

    def read_file(self, file_id: int) -> Tuple[UploadedFile, bytes]:
        """
        Return an active file record together with its bytes.

        Raises:
            FileRecordNotFoundError: If the file does not exist or was deleted.
        """
        record = self.file_store.find_file_by_id(file_id)
        if record is None or record.status != FileStatus.ACTIVE:
            raise FileRecordNotFoundError(file_id)
        return record, self.blob_store.read(record.file_path)

    def set_deletion_exception(self, file_id: int, protected: bool) -> UploadedFile:
        """
        Mark a file as exempt from (or subject to) cascading deletion.

        Raises:
            FileRecordNotFoundError: If the file does not exist.
        """
        record = self.file_store.find_file_by_id(file_id)
        if record is None:
            raise FileRecordNotFoundError(file_id)

        record.deletion_exception = protected
        record.updated_at = utcnow()
        saved = self.file_store.save_file(record)
        logger.info(
            "Deletion exception for file %s set to %s", file_id, protected
        )
        return saved
