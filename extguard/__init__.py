"""
extguard: file upload gatekeeping by extension policy.
"""

from .audit import AuditLogEntry, AuditService, InMemoryAuditSink
from .config import ExtGuardConfig, PolicyLimits
from .enums import BlockReason, FileStatus
from .extensions import extract_candidate_extensions, normalize_extension
from .file_validator import FileValidator
from .models import (
    Allowed,
    Blocked,
    CustomExtension,
    FixedExtensionSetting,
    UploadedFile,
    ValidationVerdict,
)
from .policy import ExtensionPolicyEngine
from .storage_service import StorageService

__all__ = [
    "AuditLogEntry",
    "AuditService",
    "InMemoryAuditSink",
    "ExtGuardConfig",
    "PolicyLimits",
    "BlockReason",
    "FileStatus",
    "extract_candidate_extensions",
    "normalize_extension",
    "FileValidator",
    "Allowed",
    "Blocked",
    "CustomExtension",
    "FixedExtensionSetting",
    "UploadedFile",
    "ValidationVerdict",
    "ExtensionPolicyEngine",
    "StorageService",
]

__version__ = "0.1.0"
