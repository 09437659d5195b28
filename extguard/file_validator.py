"""
File Validator Module

Main validator class that combines the structural upload checks with the
extension policy decision.
"""

import logging
from typing import Mapping

from fastapi import UploadFile

from .config import ExtGuardConfig
from .exceptions import FilenameError
from .models import ValidationVerdict
from .policy import ExtensionPolicyEngine
from .validators import ExtensionPolicyValidator, FileSizeValidator


logger = logging.getLogger(__name__)


class FileValidator:
    """
    Produces a single verdict for an upload.

    Structural problems (missing filename, empty file, oversized file) are
    caller errors and raise a ``FileValidationError`` subclass. A policy
    rejection is a normal outcome and is returned as a ``Blocked`` verdict.
    """

    def __init__(
        self,
        engine: ExtensionPolicyEngine,
        config: ExtGuardConfig | None = None,
    ):
        """
        Initialize the validator.

        Args:
            engine (ExtensionPolicyEngine): Engine resolving extension decisions.
            config (ExtGuardConfig | None): Limits to enforce. Defaults to the
                engine's configuration.

        Attributes:
            config (ExtGuardConfig): Active configuration.
            size_validator (FileSizeValidator): Empty and maximum size checks.
            extension_validator (ExtensionPolicyValidator): Policy check over
                every candidate extension.
        """
        self.engine = engine
        self.config = config or engine.config

        self.size_validator = FileSizeValidator(self.config)
        self.extension_validator = ExtensionPolicyValidator(self.config, engine)

    def _validate_filename_present(self, filename: str | None) -> str:
        if not filename or not filename.strip():
            raise FilenameError(filename=filename)
        return filename

    async def _read_file_size(self, file: UploadFile) -> int:
        """
        Determine the upload size without keeping the content around.

        Uses the size reported by the upload when present, otherwise reads the
        stream to the end. The stream position is reset afterwards.

        Args:
            file (UploadFile): Upload supporting asynchronous read and seek.

        Returns:
            int: Size in bytes.
        """
        probe = await file.read(self.config.limits.size_probe_bytes)
        await file.seek(0)

        if getattr(file, "size", None):
            return file.size

        file_size = len(probe)
        if file_size == self.config.limits.size_probe_bytes:
            remaining = await file.read()
            file_size = len(remaining)
            await file.seek(0)

        return file_size

    def validate_filename(
        self, filename: str | None, fixed_states: Mapping[str, bool] | None = None
    ) -> ValidationVerdict:
        """
        Validate only the filename against the current policy.

        Args:
            filename (str | None): Client-supplied filename.
            fixed_states (Mapping[str, bool] | None): Optional pre-fetched
                fixed block flags.

        Returns:
            ValidationVerdict: ``Allowed`` or ``Blocked``.

        Raises:
            FilenameError: If the filename is missing or blank.
        """
        filename = self._validate_filename_present(filename)
        return self.extension_validator.validate(filename, fixed_states)

    async def validate_file(self, file: UploadFile) -> ValidationVerdict:
        """
        Validate an upload before it is stored.

        Args:
            file (UploadFile): The incoming upload.

        Returns:
            ValidationVerdict: ``Allowed`` or ``Blocked``.

        Raises:
            EmptyFileError: If the upload has no content.
            FileSizeError: If the upload exceeds ``limits.max_file_size``.
            FilenameError: If the upload has no filename.
        """
        file_size = await self._read_file_size(file)
        self.size_validator.validate(file_size, file.filename)

        verdict = self.validate_filename(file.filename)

        if not verdict.is_blocked:
            logger.debug(
                "File validation passed: %s (%s bytes)", file.filename, file_size
            )
        return verdict
