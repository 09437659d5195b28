"""
Extension Guard Utilities Module

Helpers shared by the HTTP layer: error-to-status mapping, response bodies
and request metadata.
"""

import logging
from urllib.parse import quote
from dataclasses import asdict
from typing import Any, Dict, Tuple

from fastapi import Request, status

from .config import ExtGuardConfig
from .exceptions import (
    ExtensionNotFoundError,
    ExtensionPolicyError,
    ExtGuardError,
    FileRecordNotFoundError,
    FileSizeError,
    FileValidationError,
)

logger = logging.getLogger(__name__)


def http_status_for(err: ExtGuardError) -> int:
    """
    Map an extguard error to the HTTP status returned to clients.

    Args:
        err (ExtGuardError): The raised error.

    Returns:
        int: 404 for missing resources, 413 for oversized uploads, 400 for
        other caller errors and 500 for anything else.
    """
    if isinstance(err, (ExtensionNotFoundError, FileRecordNotFoundError)):
        return status.HTTP_404_NOT_FOUND
    if isinstance(err, FileSizeError):
        return status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    if isinstance(err, (FileValidationError, ExtensionPolicyError)):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_detail(err: ExtGuardError) -> Dict[str, Any]:
    """Build the JSON body describing an error."""
    detail: Dict[str, Any] = {"error": err.message, "error_code": err.error_code}

    if isinstance(err, FileSizeError):
        detail["size"] = err.size
        detail["max_size"] = err.max_size
    elif isinstance(err, FileValidationError):
        detail["file_name"] = err.filename
    elif isinstance(err, ExtensionPolicyError):
        detail["extension"] = err.extension

    return detail


def to_dict(record: Any) -> Dict[str, Any]:
    """Convert a dataclass record to a JSON-ready dictionary."""
    return asdict(record)


def content_disposition(filename: str) -> str:
    """
    Build an attachment ``Content-Disposition`` header value.

    Header values must be latin-1, so the plain ``filename`` parameter carries
    an ASCII-only fallback and the real name travels percent-encoded in
    ``filename*`` (RFC 5987).

    Args:
        filename (str): Original client-supplied filename.

    Returns:
        str: Header value safe to send for any filename.
    """
    fallback = "".join(
        char if 32 <= ord(char) < 127 and char not in '"\\' else "_"
        for char in filename
    )
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


def request_client(request: Request) -> Tuple[str | None, str | None]:
    """
    Return the client address and user agent of a request.

    The first ``X-Forwarded-For`` hop wins over the socket address.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        client_ip = forwarded.split(",")[0].strip()
    else:
        client_ip = request.client.host if request.client else None
    return client_ip, request.headers.get("user-agent")


def validate_configuration(config: ExtGuardConfig, strict: bool = False) -> None:
    """
    Validate configuration settings, reporting findings to the logger.

    Args:
        config (ExtGuardConfig): Configuration to check.
        strict (bool, optional): When True, warnings are treated as errors.
            Defaults to False.
    """
    try:
        config.validate_and_report(strict=strict)
        logger.info("Extension guard configuration validation completed successfully")
    except Exception as err:
        logger.warning(
            "Extension guard configuration validation encountered issues: %s",
            err,
        )
