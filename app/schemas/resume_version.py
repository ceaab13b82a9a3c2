"""
Pydantic schemas for resume version endpoints.
"""
from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from app.core.config import VERSION_RETENTION_DEFAULT_KEEP


class ResumeVersionCreate(BaseModel):
    """Request model for creating a resume version."""
    version_name: Optional[str] = Field(None, max_length=255, description="Version name (defaults to 'Version N')")
    changes_summary: Optional[str] = Field(None, max_length=1000, description="What changed in this version")
    
    @field_validator("version_name", "changes_summary", mode="before")
    @classmethod
    def strip_blank(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


class VersionDiffResponse(BaseModel):
    """Top-level content fields that differ between two versions."""
    added: List[str] = Field(default_factory=list)
    removed: List[str] = Field(default_factory=list)
    modified: List[str] = Field(default_factory=list)


class ResumeVersionResponse(BaseModel):
    """Response model for resume version."""
    id: int
    resume_id: int
    user_id: int
    version_number: int
    version_name: Optional[str]
    content: Dict[str, Any]
    template_id: str
    diff: Optional[VersionDiffResponse] = None
    created_by: Optional[str]
    changes_summary: Optional[str]
    created_at: datetime
    
    class Config:
        from_attributes = True


class ResumeVersionListResponse(BaseModel):
    """Response model for list of resume versions."""
    versions: List[ResumeVersionResponse]
    total: int


class ResumeVersionCompareResponse(BaseModel):
    """Response model for comparing two versions (ordered by version number)."""
    old_version: ResumeVersionResponse
    new_version: ResumeVersionResponse
    diff: VersionDiffResponse


class ResumeRestoreResponse(BaseModel):
    """Response model for restoring a version."""
    message: str
    restored_version_id: int
    restored_version_number: int
    backup_version: ResumeVersionResponse


class VersionCleanupRequest(BaseModel):
    """Request model for deleting old versions."""
    keep_count: int = Field(VERSION_RETENTION_DEFAULT_KEEP, description="Number of newest versions to keep")


class VersionCleanupResponse(BaseModel):
    """Response model for deleting old versions."""
    message: str
    deleted_count: int


class MessageResponse(BaseModel):
    message: str
