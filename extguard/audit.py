"""
Audit Module

Records every upload attempt together with the decision taken for it.
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List

from .enums import BlockReason
from .models import Blocked, utcnow


logger = logging.getLogger(__name__)


@dataclass
class AuditLogEntry:
    """One audited upload event."""

    filename: str | None
    file_size: int | None
    blocked: bool
    event: str
    block_reason: str | None = None
    block_reason_type: BlockReason | None = None
    blocked_extension: str | None = None
    client_ip: str | None = None
    user_agent: str | None = None
    id: int | None = None
    upload_time: datetime = field(default_factory=utcnow)


class AuditSink(ABC):
    """Destination for audit entries."""

    @abstractmethod
    def record(self, entry: AuditLogEntry) -> AuditLogEntry:
        pass

    @abstractmethod
    def find_all(self) -> List[AuditLogEntry]:
        """Return every entry, newest first."""


class InMemoryAuditSink(AuditSink):
    def __init__(self):
        self._lock = threading.Lock()
        self._entries: List[AuditLogEntry] = []

    def record(self, entry: AuditLogEntry) -> AuditLogEntry:
        with self._lock:
            stored = replace(entry, id=len(self._entries) + 1)
            self._entries.append(stored)
            return replace(stored)

    def find_all(self) -> List[AuditLogEntry]:
        with self._lock:
            return [replace(entry) for entry in reversed(self._entries)]


class AuditService:
    """
    Audits allow and block decisions.

    Every call writes an entry to the sink and emits a log record. Policy
    blocks are logged at warning level; they are decisions, not errors.
    """

    ATTEMPT = "ATTEMPT"
    BLOCKED = "BLOCKED"
    SUCCESS = "SUCCESS"
    INVALID = "INVALID"

    def __init__(self, sink: AuditSink | None = None):
        self.sink = sink or InMemoryAuditSink()

    def log_upload_attempt(
        self,
        filename: str | None,
        file_size: int | None,
        client_ip: str | None = None,
        user_agent: str | None = None,
    ) -> AuditLogEntry:
        logger.info("Upload attempt: %s (%s bytes) from %s", filename, file_size, client_ip)
        return self.sink.record(
            AuditLogEntry(
                filename=filename,
                file_size=file_size,
                blocked=False,
                event=self.ATTEMPT,
                client_ip=client_ip,
                user_agent=user_agent,
            )
        )

    def log_blocked_upload(
        self,
        filename: str | None,
        file_size: int | None,
        verdict: Blocked,
        client_ip: str | None = None,
        user_agent: str | None = None,
    ) -> AuditLogEntry:
        logger.warning(
            "Upload blocked: %s (%s)",
            filename,
            verdict.reason,
            extra={
                "error_type": verdict.reason_kind.value,
                "filename": filename,
                "extension": verdict.extension,
            },
        )
        return self.sink.record(
            AuditLogEntry(
                filename=filename,
                file_size=file_size,
                blocked=True,
                event=self.BLOCKED,
                block_reason=verdict.reason,
                block_reason_type=verdict.reason_kind,
                blocked_extension=verdict.extension,
                client_ip=client_ip,
                user_agent=user_agent,
            )
        )

    def log_successful_upload(
        self,
        filename: str | None,
        file_size: int | None,
        client_ip: str | None = None,
        user_agent: str | None = None,
    ) -> AuditLogEntry:
        logger.info("Upload accepted: %s (%s bytes)", filename, file_size)
        return self.sink.record(
            AuditLogEntry(
                filename=filename,
                file_size=file_size,
                blocked=False,
                event=self.SUCCESS,
                client_ip=client_ip,
                user_agent=user_agent,
            )
        )

    def log_validation_error(
        self,
        filename: str | None,
        file_size: int | None,
        message: str,
        client_ip: str | None = None,
        user_agent: str | None = None,
    ) -> AuditLogEntry:
        logger.info("Upload rejected as invalid: %s (%s)", filename, message)
        return self.sink.record(
            AuditLogEntry(
                filename=filename,
                file_size=file_size,
                blocked=False,
                event=self.INVALID,
                block_reason=message,
                client_ip=client_ip,
                user_agent=user_agent,
            )
        )

    def get_all_logs(self) -> List[AuditLogEntry]:
        return self.sink.find_all()

    def get_blocked_logs(self) -> List[AuditLogEntry]:
        return [entry for entry in self.sink.find_all() if entry.blocked]
