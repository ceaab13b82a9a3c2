"""
Version store for resume content history.

Handles snapshot creation with race-free version numbering, listing, lookup,
single deletes guarded by the last-version rule, and comparison of two
versions.
"""
import copy
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, TypeVar
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core import config
from app.core.errors import InvalidOperationError, NotFoundError, VersionConflictError
from app.db.models.resume import Resume
from app.db.models.resume_version import ResumeVersion
from app.services.diff_service import ContentDiff, diff_content
from app.services.resume_store import (
    count_versions,
    get_resume,
    lock_resume,
    next_version_number,
    resync_version_counter,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class VersionComparison:
    old_version: ResumeVersion
    new_version: ResumeVersion
    diff: ContentDiff


def run_versioned_write(
    db: Session,
    resume_id: int,
    user_id: int,
    write: Callable[[Resume], T],
) -> T:
    """
    Run a write that adds a version inside one transaction, retrying on number clashes.

    The resume row is locked before `write` runs and the transaction is
    committed once it returns. A unique-constraint clash on
    (resume_id, version_number) rolls everything back, resyncs the counter and
    tries again up to VERSION_CREATE_MAX_RETRIES times.

    Args:
        db: Database session
        resume_id: Resume ID
        user_id: Owner ID of the caller
        write: Callback receiving the locked resume; must not commit

    Returns:
        Whatever `write` returned, after commit

    Raises:
        NotFoundError: If the resume is missing, foreign or soft-deleted
        VersionConflictError: If every attempt clashed
    """
    attempts = 1 + max(0, config.VERSION_CREATE_MAX_RETRIES)

    for attempt in range(attempts):
        try:
            resume = lock_resume(db, resume_id, user_id)
            if attempt > 0:
                resync_version_counter(db, resume)
            result = write(resume)
            db.commit()
            return result
        except IntegrityError as e:
            db.rollback()
            logger.warning(
                f"Version number clash: resume_id={resume_id}, attempt={attempt + 1}/{attempts}, error={e.orig}"
            )
        except Exception:
            db.rollback()
            raise

    logger.error(f"Version number assignment failed: resume_id={resume_id}, attempts={attempts}")
    raise VersionConflictError("Could not assign a version number, please retry")


def add_snapshot(
    db: Session,
    resume: Resume,
    user_id: int,
    version_name: Optional[str] = None,
    changes_summary: Optional[str] = None,
) -> ResumeVersion:
    """Capture the resume's current content as a new version. Caller owns the transaction."""
    previous = db.query(ResumeVersion).filter(
        ResumeVersion.resume_id == resume.id
    ).order_by(ResumeVersion.version_number.desc()).first()

    version_number = next_version_number(db, resume)
    content = copy.deepcopy(resume.content or {})

    version = ResumeVersion(
        resume_id=resume.id,
        user_id=user_id,
        version_number=version_number,
        version_name=version_name or f"Version {version_number}",
        content=content,
        template_id=resume.template_id,
        diff=diff_content(previous.content, content).to_dict() if previous else None,
        created_by=str(user_id),
        changes_summary=changes_summary,
    )
    db.add(version)
    db.flush()
    return version


def create_version(
    db: Session,
    resume_id: int,
    user_id: int,
    version_name: Optional[str] = None,
    changes_summary: Optional[str] = None,
) -> ResumeVersion:
    """
    Snapshot the current content of a resume.

    Args:
        db: Database session
        resume_id: Resume ID
        user_id: Owner ID of the caller
        version_name: Optional display name (defaults to "Version {n}")
        changes_summary: Optional free text describing the changes

    Returns:
        The new ResumeVersion
    """
    version = run_versioned_write(
        db,
        resume_id,
        user_id,
        lambda resume: add_snapshot(db, resume, user_id, version_name, changes_summary),
    )
    db.refresh(version)

    logger.info(
        f"Resume version created: id={version.id}, resume_id={resume_id}, "
        f"user_id={user_id}, version={version.version_number}"
    )
    return version


def list_versions(db: Session, resume_id: int, user_id: int) -> List[ResumeVersion]:
    """List all versions of a resume, newest first."""
    get_resume(db, resume_id, user_id)

    return db.query(ResumeVersion).filter(
        ResumeVersion.resume_id == resume_id,
        ResumeVersion.user_id == user_id
    ).order_by(ResumeVersion.version_number.desc()).all()


def get_version(db: Session, resume_id: int, version_id: int, user_id: int) -> ResumeVersion:
    """
    Get one version of a live resume owned by the user.

    Raises:
        NotFoundError: If the version is missing, belongs to another resume or
            user, or the resume is soft-deleted
    """
    version = db.query(ResumeVersion).join(
        Resume, Resume.id == ResumeVersion.resume_id
    ).filter(
        ResumeVersion.id == version_id,
        ResumeVersion.resume_id == resume_id,
        ResumeVersion.user_id == user_id,
        Resume.user_id == user_id,
        Resume.deleted_at.is_(None)
    ).first()

    if not version:
        raise NotFoundError("Version not found")
    return version


def delete_version(db: Session, resume_id: int, version_id: int, user_id: int) -> None:
    """
    Delete one version, refusing to delete the last remaining one.

    The resume write lock is held for the count-and-delete so two concurrent
    deletes cannot both see two versions and leave none.

    Raises:
        NotFoundError: If the resume or version is missing
        InvalidOperationError: If this is the only version left
    """
    try:
        lock_resume(db, resume_id, user_id)
        version = get_version(db, resume_id, version_id, user_id)

        if count_versions(db, resume_id) <= 1:
            raise InvalidOperationError("Cannot delete the only version")

        version_number = version.version_number
        db.delete(version)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        f"Resume version deleted: id={version_id}, resume_id={resume_id}, "
        f"user_id={user_id}, version={version_number}"
    )


def compare_versions(
    db: Session,
    resume_id: int,
    version_id_1: int,
    version_id_2: int,
    user_id: int,
) -> VersionComparison:
    """
    Compare two versions of a resume.

    The older/newer split is decided by version number, not by argument order.
    """
    first = get_version(db, resume_id, version_id_1, user_id)
    second = get_version(db, resume_id, version_id_2, user_id)

    old_version, new_version = sorted((first, second), key=lambda v: v.version_number)

    return VersionComparison(
        old_version=old_version,
        new_version=new_version,
        diff=diff_content(old_version.content, new_version.content),
    )
