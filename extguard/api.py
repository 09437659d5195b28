"""
FastAPI Integration Module

HTTP routes for extension administration, upload validation, file
management and audit queries.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from fastapi import APIRouter, Depends, FastAPI, Query, Request, UploadFile, status
from fastapi.responses import JSONResponse, Response

from .audit import AuditService, AuditSink
from .config import ExtGuardConfig
from .enums import FileStatus
from .exceptions import ExtGuardError, FileValidationError
from .file_validator import FileValidator
from .models import Blocked
from .policy import ExtensionPolicyEngine
from .storage_service import StorageService
from .stores import (
    BlobStore,
    FileRecordStore,
    InMemoryFileRecordStore,
    InMemoryPolicyStore,
    LocalBlobStore,
    PolicyStore,
)
from .utils import (
    content_disposition,
    error_detail,
    http_status_for,
    request_client,
    to_dict,
    validate_configuration,
)


logger = logging.getLogger(__name__)


@dataclass
class ExtGuardServices:
    """Service graph shared by every route of one application."""

    config: ExtGuardConfig
    engine: ExtensionPolicyEngine
    storage: StorageService
    validator: FileValidator
    audit: AuditService


def get_services(request: Request) -> ExtGuardServices:
    return request.app.state.services


extensions_router = APIRouter(prefix="/api/extensions", tags=["extensions"])
upload_router = APIRouter(prefix="/api/upload", tags=["upload"])
files_router = APIRouter(prefix="/api/files", tags=["files"])
audit_router = APIRouter(prefix="/api/audit", tags=["audit"])


@extensions_router.get("/fixed")
def list_fixed_extensions(services: ExtGuardServices = Depends(get_services)):
    return [to_dict(s) for s in services.engine.get_all_fixed_extension_settings()]


@extensions_router.put("/fixed/{extension}")
def update_fixed_extension(
    extension: str,
    blocked: bool = Query(...),
    services: ExtGuardServices = Depends(get_services),
):
    return to_dict(services.engine.update_fixed_extension_setting(extension, blocked))


@extensions_router.get("/custom")
def list_custom_extensions(services: ExtGuardServices = Depends(get_services)):
    return [to_dict(e) for e in services.engine.get_all_custom_extensions()]


@extensions_router.post("/custom")
def add_custom_extension(
    extension: str = Query(...),
    services: ExtGuardServices = Depends(get_services),
):
    return to_dict(services.engine.add_custom_extension(extension))


@extensions_router.delete("/custom/{extension_id}")
def delete_custom_extension(
    extension_id: int, services: ExtGuardServices = Depends(get_services)
):
    services.engine.delete_custom_extension(extension_id)
    return {"message": "Extension deleted"}


@extensions_router.get("/blocked")
def list_blocked_extensions(services: ExtGuardServices = Depends(get_services)):
    return {"extensions": services.engine.get_all_blocked_extensions()}


@extensions_router.get("/check")
def check_filename(
    filename: str = Query(...),
    services: ExtGuardServices = Depends(get_services),
):
    """Lightweight pre-check of a filename against the current policy."""
    fixed_states = services.engine.get_fixed_extension_states()
    blocked_extension = services.engine.find_blocked_extension(filename, fixed_states)
    return {
        "filename": filename,
        "blocked": blocked_extension is not None,
        "blocked_extension": blocked_extension,
    }


async def _validate_with_audit(
    request: Request, file: UploadFile, services: ExtGuardServices
):
    client_ip, user_agent = request_client(request)
    services.audit.log_upload_attempt(file.filename, file.size, client_ip, user_agent)

    try:
        verdict = await services.validator.validate_file(file)
    except FileValidationError as err:
        services.audit.log_validation_error(
            file.filename, file.size, err.message, client_ip, user_agent
        )
        raise

    if isinstance(verdict, Blocked):
        services.audit.log_blocked_upload(
            file.filename, file.size, verdict, client_ip, user_agent
        )
    return verdict, client_ip, user_agent


@upload_router.post("/file")
async def upload_file(
    request: Request,
    file: UploadFile,
    services: ExtGuardServices = Depends(get_services),
):
    """Validate an upload and store it when the policy allows it."""
    verdict, client_ip, user_agent = await _validate_with_audit(request, file, services)

    if isinstance(verdict, Blocked):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": verdict.reason,
                "file_name": file.filename,
                "block_reason": verdict.reason_kind.value,
                "blocked_extension": verdict.extension,
            },
        )

    record = await services.storage.store_file(file)
    services.audit.log_successful_upload(
        record.original_filename, record.file_size, client_ip, user_agent
    )
    return {
        "success": True,
        "message": "File uploaded successfully",
        "file_id": record.id,
        "original_file_name": record.original_filename,
        "file_size": record.file_size,
    }


@upload_router.post("/check")
async def check_upload(
    request: Request,
    file: UploadFile,
    services: ExtGuardServices = Depends(get_services),
):
    """Validate an upload without storing it."""
    verdict, _, _ = await _validate_with_audit(request, file, services)

    body = {"file_name": file.filename, "file_size": file.size}
    if isinstance(verdict, Blocked):
        body.update(
            result="blocked",
            message=verdict.reason,
            block_reason=verdict.reason_kind.value,
            blocked_extension=verdict.extension,
        )
    else:
        body.update(result="allowed", message="File upload is allowed")
    return body


@files_router.get("")
def list_files(
    file_status: FileStatus | None = Query(None, alias="status"),
    services: ExtGuardServices = Depends(get_services),
):
    if file_status is None:
        files = services.storage.get_all_files()
    else:
        files = services.storage.get_files_by_status(file_status)
    return [to_dict(f) for f in files]


@files_router.get("/extension/{extension}")
def list_files_by_extension(
    extension: str, services: ExtGuardServices = Depends(get_services)
):
    return [to_dict(f) for f in services.storage.get_files_by_extension(extension)]


@files_router.get("/{file_id}")
def get_file(file_id: int, services: ExtGuardServices = Depends(get_services)):
    record = services.storage.find_by_id(file_id)
    if record is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": f"File {file_id} not found"},
        )
    return to_dict(record)


@files_router.get("/{file_id}/download")
def download_file(file_id: int, services: ExtGuardServices = Depends(get_services)):
    record, content = services.storage.read_file(file_id)
    return Response(
        content=content,
        media_type=record.content_type,
        headers={"Content-Disposition": content_disposition(record.original_filename)},
    )


@files_router.put("/{file_id}/protection")
def set_file_protection(
    file_id: int,
    protected: bool = Query(...),
    services: ExtGuardServices = Depends(get_services),
):
    record = services.storage.set_deletion_exception(file_id, protected)
    return {
        "message": "File protection enabled" if protected else "File protection disabled",
        "file": to_dict(record),
    }


@audit_router.get("")
def list_audit_logs(services: ExtGuardServices = Depends(get_services)):
    logs = services.audit.get_all_logs()
    return {"content": [to_dict(entry) for entry in logs], "total": len(logs)}


@audit_router.get("/blocked")
def list_blocked_audit_logs(services: ExtGuardServices = Depends(get_services)):
    logs = services.audit.get_blocked_logs()
    return {"content": [to_dict(entry) for entry in logs], "total": len(logs)}


async def extguard_exception_handler(request: Request, exc: ExtGuardError):
    """Convert extguard exceptions to JSON error responses."""
    status_code = http_status_for(exc)
    if status_code >= 500:
        logger.error("Request %s failed: %s", request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=error_detail(exc))


def create_app(
    config: ExtGuardConfig | None = None,
    upload_dir: str | Path | None = None,
    policy_store: PolicyStore | None = None,
    file_store: FileRecordStore | None = None,
    blob_store: BlobStore | None = None,
    audit_sink: AuditSink | None = None,
) -> FastAPI:
    """
    Build a FastAPI application wired with the extguard services.

    Fixed extensions from ``config`` are seeded into the policy store.

    Args:
        config (ExtGuardConfig | None): Configuration; defaults to ``ExtGuardConfig()``.
        upload_dir (str | Path | None): Directory for the local blob store, used
            when ``blob_store`` is not given. Defaults to ``./uploads``.
        policy_store (PolicyStore | None): Defaults to an in-memory store.
        file_store (FileRecordStore | None): Defaults to an in-memory store.
        blob_store (BlobStore | None): Defaults to a ``LocalBlobStore``.
        audit_sink (AuditSink | None): Defaults to an in-memory sink.

    Returns:
        FastAPI: The configured application.
    """
    config = config or ExtGuardConfig()
    validate_configuration(config)

    storage = StorageService(
        file_store or InMemoryFileRecordStore(),
        blob_store or LocalBlobStore(upload_dir or "uploads"),
        config,
    )
    engine = ExtensionPolicyEngine(
        policy_store or InMemoryPolicyStore(), storage_service=storage, config=config
    )
    engine.initialize_fixed_extensions()

    app = FastAPI(
        title="extguard",
        description="File upload gatekeeping by extension policy",
        version="0.1.0",
    )
    app.state.services = ExtGuardServices(
        config=config,
        engine=engine,
        storage=storage,
        validator=FileValidator(engine, config),
        audit=AuditService(audit_sink),
    )

    app.add_exception_handler(ExtGuardError, extguard_exception_handler)
    app.include_router(extensions_router)
    app.include_router(upload_router)
    app.include_router(files_router)
    app.include_router(audit_router)

    return app
