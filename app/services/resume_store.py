"""
Resume store - the document collaborator consumed by the version history services.

Only the operations the version engine needs live here: ownership-checked
lookup, content overwrite and the per-resume version counter. Full resume CRUD
is handled elsewhere.
"""
import logging
from typing import Any, Dict
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.models.resume import Resume
from app.db.models.resume_version import ResumeVersion

logger = logging.getLogger(__name__)


def get_resume(db: Session, resume_id: int, user_id: int, lock: bool = False) -> Resume:
    """
    Get a live resume owned by the user.
    
    Args:
        db: Database session
        resume_id: Resume ID
        user_id: Owner ID of the caller
        lock: Take a row lock (SELECT ... FOR UPDATE) for the rest of the transaction
        
    Returns:
        Resume object
        
    Raises:
        NotFoundError: If the resume is missing, owned by someone else, or soft-deleted
    """
    query = db.query(Resume).filter(
        Resume.id == resume_id,
        Resume.user_id == user_id,
        Resume.deleted_at.is_(None)
    )
    if lock:
        query = query.with_for_update()
    
    resume = query.first()
    if not resume:
        raise NotFoundError("Resume not found")
    return resume


def lock_resume(db: Session, resume_id: int, user_id: int) -> Resume:
    """
    Get a live resume owned by the user and hold its write lock until commit/rollback.

    The transaction opens with a no-op UPDATE of the resume row. Postgres takes
    the row lock, and SQLite takes its database write lock (pysqlite only
    begins a transaction on the first DML statement, and SQLite ignores
    FOR UPDATE). A second writer on the same resume waits here.

    Raises:
        NotFoundError: If the resume is missing, owned by someone else, or soft-deleted
    """
    locked = db.query(Resume).filter(
        Resume.id == resume_id,
        Resume.user_id == user_id,
        Resume.deleted_at.is_(None)
    ).update(
        # updated_at is set explicitly so its onupdate default doesn't fire
        {
            Resume.version_counter: Resume.version_counter,
            Resume.updated_at: Resume.updated_at,
        },
        synchronize_session=False
    )
    if not locked:
        raise NotFoundError("Resume not found")

    return get_resume(db, resume_id, user_id, lock=True)


def update_resume_content(db: Session, resume: Resume, content: Dict[str, Any], template_id: str) -> None:
    """Overwrite resume content and template. Caller owns the transaction."""
    resume.content = content
    resume.template_id = template_id
    db.flush()


def count_versions(db: Session, resume_id: int) -> int:
    return db.query(func.count(ResumeVersion.id)).filter(
        ResumeVersion.resume_id == resume_id
    ).scalar() or 0


def next_version_number(db: Session, resume: Resume) -> int:
    """
    Reserve the next version number for a resume.
    
    The increment is done in SQL (version_counter = version_counter + 1) so two
    writers can never read the same value. The row stays locked until the
    surrounding transaction ends, and a rollback releases the number again.
    """
    db.query(Resume).filter(Resume.id == resume.id).update(
        {Resume.version_counter: Resume.version_counter + 1},
        synchronize_session=False
    )
    db.expire(resume, ["version_counter"])
    return db.query(Resume.version_counter).filter(Resume.id == resume.id).scalar()


def resync_version_counter(db: Session, resume: Resume) -> None:
    """Move the counter past the highest stored version number if it fell behind."""
    highest = db.query(func.max(ResumeVersion.version_number)).filter(
        ResumeVersion.resume_id == resume.id
    ).scalar() or 0
    
    updated = db.query(Resume).filter(
        Resume.id == resume.id,
        Resume.version_counter < highest
    ).update({Resume.version_counter: highest}, synchronize_session=False)
    
    if updated:
        db.expire(resume, ["version_counter"])
        logger.warning(f"Version counter resynced: resume_id={resume.id}, counter={highest}")
