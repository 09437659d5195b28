"""
Domain records and the validation verdict.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Union

from .enums import BlockReason, FileStatus


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class FixedExtensionSetting:
    """Block flag for one member of the fixed extension vocabulary."""

    extension: str
    is_blocked: bool = False
    id: int | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass
class CustomExtension:
    """Administrator-added extension; blocked by existence."""

    extension: str
    id: int | None = None
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class UploadedFile:
    """Metadata of a stored upload."""

    original_filename: str
    stored_filename: str
    file_path: str
    extension: str
    file_size: int
    content_type: str = "application/octet-stream"
    status: FileStatus = FileStatus.ACTIVE
    deletion_exception: bool = False
    id: int | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class Allowed:
    """Verdict for an upload that passed every policy check."""

    @property
    def is_blocked(self) -> bool:
        return False


@dataclass(frozen=True)
class Blocked:
    """
    Verdict for an upload rejected by policy.

    Attributes:
        reason (str): Human-readable message naming the offending extension.
        reason_kind (BlockReason): Category of the decision.
        extension (str): The candidate extension that triggered the block.
    """

    reason: str
    reason_kind: BlockReason
    extension: str

    @property
    def is_blocked(self) -> bool:
        return True


ValidationVerdict = Union[Allowed, Blocked]
