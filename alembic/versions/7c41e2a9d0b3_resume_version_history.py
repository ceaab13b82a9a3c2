"""resume_version_history

Revision ID: 7c41e2a9d0b3
Revises: 
Create Date: 2026-10-16 09:12:44.118204

Production-safe migration: Only creates tables that don't exist yet.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '7c41e2a9d0b3'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    """Create users, resumes and resume_versions tables if missing."""
    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('full_name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    
    if not table_exists('resumes'):
        op.create_table('resumes',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('template_id', sa.String(), nullable=False),
            sa.Column('content', sa.JSON(), nullable=False),
            sa.Column('version_counter', sa.Integer(), server_default='0', nullable=False),
            sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_resume_user_deleted', 'resumes', ['user_id', 'deleted_at'], unique=False)
        op.create_index(op.f('ix_resumes_id'), 'resumes', ['id'], unique=False)
        op.create_index(op.f('ix_resumes_user_id'), 'resumes', ['user_id'], unique=False)
    
    if not table_exists('resume_versions'):
        op.create_table('resume_versions',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('resume_id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('version_number', sa.Integer(), nullable=False),
            sa.Column('version_name', sa.String(length=255), nullable=True),
            sa.Column('content', sa.JSON(), nullable=False),
            sa.Column('template_id', sa.String(), nullable=False),
            sa.Column('diff', sa.JSON(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('created_by', sa.String(), nullable=True),
            sa.Column('changes_summary', sa.Text(), nullable=True),
            sa.ForeignKeyConstraint(['resume_id'], ['resumes.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('resume_id', 'version_number', name='uq_resume_versions_resume_number')
        )
        op.create_index('idx_resume_version_number', 'resume_versions', ['resume_id', 'version_number'], unique=False)
        op.create_index(op.f('ix_resume_versions_created_at'), 'resume_versions', ['created_at'], unique=False)
        op.create_index(op.f('ix_resume_versions_id'), 'resume_versions', ['id'], unique=False)
        op.create_index(op.f('ix_resume_versions_resume_id'), 'resume_versions', ['resume_id'], unique=False)
        op.create_index(op.f('ix_resume_versions_user_id'), 'resume_versions', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_table('resume_versions')
    op.drop_table('resumes')
    op.drop_table('users')
