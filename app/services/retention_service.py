"""
Retention policy for resume version history.

Keeps the newest N versions of a resume and deletes the rest in one batch.
"""
import logging
from typing import Optional
from sqlalchemy.orm import Session

from app.core import config
from app.core.errors import InvalidOperationError
from app.db.models.resume_version import ResumeVersion
from app.services.resume_store import lock_resume

logger = logging.getLogger(__name__)


def delete_old_versions(
    db: Session,
    resume_id: int,
    user_id: int,
    keep_count: Optional[int] = None
) -> int:
    """
    Delete all but the newest `keep_count` versions of a resume.
    
    A keep_count below 1 is rejected rather than clamped, so cleanup can never
    empty a resume's history.
    
    Args:
        db: Database session
        resume_id: Resume ID
        user_id: Owner ID of the caller
        keep_count: Versions to keep (default: VERSION_RETENTION_DEFAULT_KEEP)
        
    Returns:
        Number of versions deleted (0 if nothing was over the limit)
        
    Raises:
        NotFoundError: If the resume is missing, foreign or soft-deleted
        InvalidOperationError: If keep_count < 1
    """
    if keep_count is None:
        keep_count = config.VERSION_RETENTION_DEFAULT_KEEP
    
    try:
        lock_resume(db, resume_id, user_id)
        
        if keep_count < 1:
            raise InvalidOperationError("keep_count must be at least 1")
        
        stale_ids = [
            row.id for row in db.query(ResumeVersion.id).filter(
                ResumeVersion.resume_id == resume_id
            ).order_by(ResumeVersion.version_number.desc()).offset(keep_count).all()
        ]
        
        if not stale_ids:
            db.rollback()
            return 0
        
        deleted = db.query(ResumeVersion).filter(
            ResumeVersion.id.in_(stale_ids)
        ).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise
    
    logger.info(
        f"Old resume versions deleted: resume_id={resume_id}, user_id={user_id}, "
        f"kept={keep_count}, deleted={deleted}"
    )
    return deleted
