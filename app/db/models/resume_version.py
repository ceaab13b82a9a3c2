"""
Resume Version model - immutable, sequence-numbered snapshots of resume content.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, Index, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class ResumeVersion(Base):
    __tablename__ = "resume_versions"

    id = Column(Integer, primary_key=True, index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    
    # Version metadata
    version_number = Column(Integer, nullable=False)
    version_name = Column(String(255), nullable=True)  # defaults to "Version {n}"
    
    # Snapshot (never updated after insert)
    content = Column(JSON, nullable=False)
    template_id = Column(String, nullable=False)
    
    # Top-level diff against the previous newest version at capture time
    diff = Column(JSON, nullable=True)
    
    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    created_by = Column(String, nullable=True)
    changes_summary = Column(Text, nullable=True)
    
    # Relationships
    resume = relationship("Resume", back_populates="versions")
    
    __table_args__ = (
        UniqueConstraint('resume_id', 'version_number', name='uq_resume_versions_resume_number'),
        Index('idx_resume_version_number', 'resume_id', 'version_number'),
    )
    
    def __repr__(self):
        return f"<ResumeVersion(id={self.id}, resume_id={self.resume_id}, version={self.version_number}, name='{self.version_name}')>"
