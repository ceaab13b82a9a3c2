"""
Restore a resume to an earlier version without losing its current state.
"""
import copy
import logging
from dataclasses import dataclass
from sqlalchemy.orm import Session

from app.core import config
from app.db.models.resume import Resume
from app.db.models.resume_version import ResumeVersion
from app.services.resume_store import update_resume_content
from app.services.version_service import add_snapshot, get_version, run_versioned_write

logger = logging.getLogger(__name__)


@dataclass
class RestoreResult:
    resume: Resume
    backup_version: ResumeVersion
    restored_version: ResumeVersion


def restore_version(db: Session, resume_id: int, version_id: int, user_id: int) -> RestoreResult:
    """
    Restore a resume's content and template from one of its versions.
    
    The current state is always captured as a new "Auto-save before restore"
    version first. Both the backup and the overwrite are committed in a single
    transaction under the resume row lock: if either step fails nothing is
    written and the resume keeps its current content.
    
    Args:
        db: Database session
        resume_id: Resume ID
        version_id: Version to restore
        user_id: Owner ID of the caller
        
    Returns:
        RestoreResult with the updated resume, the backup version and the target
        
    Raises:
        NotFoundError: If the resume or version is missing
        VersionConflictError: If the backup version could not be numbered
    """
    target = get_version(db, resume_id, version_id, user_id)
    
    # Versions are immutable; copy now so a retry after rollback doesn't reload them
    target_number = target.version_number
    target_content = copy.deepcopy(target.content or {})
    target_template_id = target.template_id
    
    def write(resume: Resume) -> ResumeVersion:
        backup = add_snapshot(
            db,
            resume,
            user_id,
            version_name=config.RESTORE_SNAPSHOT_NAME,
            changes_summary=f"Restoring to version {target_number}",
        )
        update_resume_content(db, resume, target_content, target_template_id)
        return backup
    
    backup = run_versioned_write(db, resume_id, user_id, write)
    db.refresh(backup)
    
    resume = db.query(Resume).filter(Resume.id == resume_id).one()
    restored = get_version(db, resume_id, version_id, user_id)
    
    logger.info(
        f"Resume restored: resume_id={resume_id}, user_id={user_id}, "
        f"restored_version={target_number}, backup_version={backup.version_number}"
    )
    
    return RestoreResult(resume=resume, backup_version=backup, restored_version=restored)
