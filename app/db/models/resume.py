"""
Resume model - the mutable document whose content is versioned.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    
    title = Column(String, nullable=False)
    template_id = Column(String, nullable=False)
    content = Column(JSON, nullable=False, default=dict)  # personal_info, experience, education, skills, ...
    
    # Last version number handed out; only ever incremented so numbers are never reused
    version_counter = Column(Integer, nullable=False, default=0, server_default="0")
    
    # Soft delete marker
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    # Relationships
    user = relationship("User", backref="resumes")
    versions = relationship(
        "ResumeVersion",
        back_populates="resume",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    
    __table_args__ = (
        Index('idx_resume_user_deleted', 'user_id', 'deleted_at'),
    )
    
    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
    
    def __repr__(self):
        return f"<Resume(id={self.id}, title='{self.title}', version_counter={self.version_counter})>"
