"""Shared pytest fixtures for extguard tests."""

import pytest

from extguard.config import ExtGuardConfig, PolicyLimits
from extguard.file_validator import FileValidator
from extguard.models import UploadedFile
from extguard.policy import ExtensionPolicyEngine
from extguard.storage_service import StorageService
from extguard.stores import InMemoryFileRecordStore, InMemoryPolicyStore, LocalBlobStore


@pytest.fixture
def default_config() -> ExtGuardConfig:
    """
    Provide default ExtGuardConfig for testing.

    Returns:
        Default ExtGuardConfig instance.
    """
    return ExtGuardConfig()


@pytest.fixture
def seeded_config() -> ExtGuardConfig:
    """
    Provide a configuration with exe blocked and every other fixed extension allowed.

    Returns:
        ExtGuardConfig seeded like a typical deployment.
    """
    return ExtGuardConfig(
        fixed_extensions={**ExtGuardConfig.DEFAULT_FIXED_EXTENSIONS, "exe": True}
    )


@pytest.fixture
def small_config() -> ExtGuardConfig:
    """
    Provide a configuration with tiny limits for boundary tests.

    Returns:
        ExtGuardConfig with a 1KB size limit and room for 3 custom extensions.
    """
    return ExtGuardConfig(
        fixed_extensions={"exe": True, "bat": False},
        limits=PolicyLimits(max_file_size=1024, max_custom_extensions=3),
    )


@pytest.fixture
def policy_store() -> InMemoryPolicyStore:
    return InMemoryPolicyStore()


@pytest.fixture
def file_store() -> InMemoryFileRecordStore:
    return InMemoryFileRecordStore()


@pytest.fixture
def blob_store(tmp_path) -> LocalBlobStore:
    return LocalBlobStore(tmp_path / "uploads")


@pytest.fixture
def storage_service(file_store, blob_store, seeded_config) -> StorageService:
    return StorageService(file_store, blob_store, seeded_config)


@pytest.fixture
def engine(policy_store, storage_service, seeded_config) -> ExtensionPolicyEngine:
    """
    Provide a policy engine with seeded fixed extensions and real storage.

    Returns:
        ExtensionPolicyEngine wired to in-memory stores.
    """
    engine = ExtensionPolicyEngine(
        policy_store, storage_service=storage_service, config=seeded_config
    )
    engine.initialize_fixed_extensions()
    return engine


@pytest.fixture
def file_validator(engine) -> FileValidator:
    return FileValidator(engine)


@pytest.fixture
def mock_upload_file():
    """
    Create a mock UploadFile-like object for testing.

    Returns:
        Mock file class with required attributes and methods.
    """

    class MockUploadFile:
        """Mock implementation of UploadFile protocol."""

        def __init__(
            self, filename: str | None, content: bytes, size: int | None = None
        ):
            self.filename = filename
            self.content = content
            self.size = size if size is not None else len(content)
            self._position = 0

        async def read(self, size: int = -1) -> bytes:
            """
            Read file content.

            Args:
                size: Number of bytes to read (-1 for all).

            Returns:
                File content bytes.
            """
            if size == -1:
                result = self.content[self._position :]
                self._position = len(self.content)
            else:
                result = self.content[self._position : self._position + size]
                self._position += len(result)
            return result

        async def seek(self, offset: int) -> int:
            """
            Seek to position in file.

            Args:
                offset: Position to seek to.

            Returns:
                New position.
            """
            self._position = offset
            return self._position

    return MockUploadFile


@pytest.fixture
def make_file_record():
    """
    Factory fixture building UploadedFile records.

    Returns:
        Function creating an ACTIVE record for a given extension.
    """

    def _make(extension: str = "txt", protected: bool = False) -> UploadedFile:
        filename = f"test.{extension}"
        return UploadedFile(
            original_filename=filename,
            stored_filename=f"uuid-{filename}",
            file_path=f"uuid-{filename}",
            extension=extension,
            file_size=1024,
            deletion_exception=protected,
        )

    return _make
