"""Persistence and blob storage backends."""

from .base import BlobStore, FileRecordStore, PolicyStore
from .filesystem import LocalBlobStore
from .memory import InMemoryFileRecordStore, InMemoryPolicyStore

__all__ = [
    "BlobStore",
    "FileRecordStore",
    "PolicyStore",
    "LocalBlobStore",
    "InMemoryFileRecordStore",
    "InMemoryPolicyStore",
]
