"""
Resume Version endpoints for snapshotting, restoring and comparing resume content.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Body, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.db.models.user import User
from app.core.auth_dependency import get_current_user_obj
from app.core.errors import VersioningError
from app.services import version_service, restore_service, retention_service
from app.schemas.resume_version import (
    ResumeVersionCreate,
    ResumeVersionResponse,
    ResumeVersionListResponse,
    ResumeVersionCompareResponse,
    ResumeRestoreResponse,
    VersionCleanupRequest,
    VersionCleanupResponse,
    VersionDiffResponse,
    MessageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes", tags=["Resume Versions"])


def _http_error(error: VersioningError) -> HTTPException:
    """Translate a domain error into an HTTP error."""
    return HTTPException(status_code=error.status_code, detail=error.message)


def _server_error(action: str, error: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {error}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}"
    )


@router.post(
    "/{resume_id}/versions",
    response_model=ResumeVersionResponse,
    status_code=status.HTTP_201_CREATED
)
def create_version(
    resume_id: int,
    request: Optional[ResumeVersionCreate] = Body(None),
    current_user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Snapshot the current content of a resume."""
    request = request or ResumeVersionCreate()
    try:
        version = version_service.create_version(
            db,
            resume_id,
            current_user.id,
            version_name=request.version_name,
            changes_summary=request.changes_summary,
        )
        return ResumeVersionResponse.model_validate(version)
    except VersioningError as e:
        raise _http_error(e)
    except Exception as e:
        raise _server_error("create version", e)


@router.get("/{resume_id}/versions", response_model=ResumeVersionListResponse)
def list_versions(
    resume_id: int,
    current_user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """List all versions of a resume, newest first."""
    try:
        versions = version_service.list_versions(db, resume_id, current_user.id)
    except VersioningError as e:
        raise _http_error(e)
    except Exception as e:
        raise _server_error("list versions", e)

    return ResumeVersionListResponse(
        versions=[ResumeVersionResponse.model_validate(v) for v in versions],
        total=len(versions)
    )


# Declared before /{version_id} so "compare" is not parsed as a version ID
@router.get("/{resume_id}/versions/compare", response_model=ResumeVersionCompareResponse)
def compare_versions(
    resume_id: int,
    version1: Optional[int] = Query(None, description="First version ID"),
    version2: Optional[int] = Query(None, description="Second version ID"),
    current_user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Compare two versions; the older one is always returned as old_version."""
    if version1 is None or version2 is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Both version1 and version2 query parameters are required"
        )

    try:
        comparison = version_service.compare_versions(
            db, resume_id, version1, version2, current_user.id
        )
    except VersioningError as e:
        raise _http_error(e)
    except Exception as e:
        raise _server_error("compare versions", e)

    return ResumeVersionCompareResponse(
        old_version=ResumeVersionResponse.model_validate(comparison.old_version),
        new_version=ResumeVersionResponse.model_validate(comparison.new_version),
        diff=VersionDiffResponse(**comparison.diff.to_dict()),
    )


@router.post("/{resume_id}/versions/cleanup", response_model=VersionCleanupResponse)
def cleanup_versions(
    resume_id: int,
    request: Optional[VersionCleanupRequest] = Body(None),
    current_user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Delete old versions, keeping the most recent keep_count."""
    request = request or VersionCleanupRequest()
    try:
        deleted_count = retention_service.delete_old_versions(
            db, resume_id, current_user.id, request.keep_count
        )
    except VersioningError as e:
        raise _http_error(e)
    except Exception as e:
        raise _server_error("delete old versions", e)

    return VersionCleanupResponse(
        message=f"Deleted {deleted_count} old versions",
        deleted_count=deleted_count,
    )


@router.get("/{resume_id}/versions/{version_id}", response_model=ResumeVersionResponse)
def get_version(
    resume_id: int,
    version_id: int,
    current_user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Get a single version."""
    try:
        version = version_service.get_version(db, resume_id, version_id, current_user.id)
    except VersioningError as e:
        raise _http_error(e)
    except Exception as e:
        raise _server_error("get version", e)

    return ResumeVersionResponse.model_validate(version)


@router.post("/{resume_id}/versions/{version_id}/restore", response_model=ResumeRestoreResponse)
def restore_version(
    resume_id: int,
    version_id: int,
    current_user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Restore a resume to a version (the current state is saved as a new version first)."""
    try:
        result = restore_service.restore_version(db, resume_id, version_id, current_user.id)
    except VersioningError as e:
        raise _http_error(e)
    except Exception as e:
        raise _server_error("restore version", e)

    return ResumeRestoreResponse(
        message="Version restored successfully",
        restored_version_id=result.restored_version.id,
        restored_version_number=result.restored_version.version_number,
        backup_version=ResumeVersionResponse.model_validate(result.backup_version),
    )


@router.delete("/{resume_id}/versions/{version_id}", response_model=MessageResponse)
def delete_version(
    resume_id: int,
    version_id: int,
    current_user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Delete a version. The last remaining version cannot be deleted."""
    try:
        version_service.delete_version(db, resume_id, version_id, current_user.id)
    except VersioningError as e:
        raise _http_error(e)
    except Exception as e:
        raise _server_error("delete version", e)

    return MessageResponse(message="Version deleted successfully")
