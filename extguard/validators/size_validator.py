"""File size validator enforcing the empty-file and maximum-size rules."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .base import BaseValidator
from ..exceptions import EmptyFileError, FileSizeError

if TYPE_CHECKING:
    from ..config import ExtGuardConfig


logger = logging.getLogger(__name__)


class FileSizeValidator(BaseValidator):
    """
    Validator for upload sizes.

    Attributes:
        config: Configuration providing ``limits.max_file_size``.
    """

    def __init__(self, config: ExtGuardConfig):
        super().__init__(config)

    def validate_file_size(self, size: int, filename: str | None = None) -> None:
        """
        Validate an upload size in bytes.

        Args:
            size: Detected size of the upload.
            filename: Filename, reported with the error.

        Raises:
            EmptyFileError: If the upload has no content.
            FileSizeError: If the upload exceeds the configured maximum.
        """
        if size <= 0:
            raise EmptyFileError(filename=filename)

        max_size = self.config.limits.max_file_size
        if size > max_size:
            logger.warning(
                "Upload exceeds size limit",
                extra={
                    "error_type": "file_too_large",
                    "filename": filename,
                    "size": size,
                    "max_size": max_size,
                },
            )
            raise FileSizeError(
                message=f"File too large. File size: {size // (1024 * 1024)}MB, maximum: {max_size // (1024 * 1024)}MB",
                filename=filename,
                size=size,
                max_size=max_size,
            )

    def validate(self, size: int, filename: str | None = None) -> None:
        return self.validate_file_size(size, filename)
