"""
Apply the version retention policy to every live resume.

Usage: python scripts/prune_old_versions.py [keep_count]
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from app.core import config
from app.db.session import SessionLocal
from app.db.models.resume import Resume
from app.services.retention_service import delete_old_versions

def prune_old_versions(keep_count: int = config.VERSION_RETENTION_DEFAULT_KEEP):
    """Keep only the newest keep_count versions of each live resume."""
    db = SessionLocal()
    try:
        resumes = db.query(Resume.id, Resume.user_id).filter(Resume.deleted_at.is_(None)).all()
        
        total_deleted = 0
        for resume_id, user_id in resumes:
            deleted = delete_old_versions(db, resume_id, user_id, keep_count)
            if deleted:
                print(f"Resume {resume_id}: deleted {deleted} old version(s)")
            total_deleted += deleted
        
        print(f"\nDeleted {total_deleted} version(s) across {len(resumes)} resume(s), keeping {keep_count} each")
        return total_deleted
    finally:
        db.close()

if __name__ == "__main__":
    prune_old_versions(int(sys.argv[1]) if len(sys.argv) > 1 else config.VERSION_RETENTION_DEFAULT_KEEP)
