"""
Enumerations shared across the extension policy system.
"""

from enum import Enum


class BlockReason(str, Enum):
    """Kinds of policy decisions that reject an upload."""

    BLOCKED_EXTENSION = "BLOCKED_EXTENSION"


class FileStatus(str, Enum):
    """Lifecycle state of an uploaded file record."""

    ACTIVE = "ACTIVE"
    DELETED = "DELETED"
