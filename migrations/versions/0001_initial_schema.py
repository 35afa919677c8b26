"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('role', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('key_hash', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('last_used_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_key_hash', 'users', ['key_hash'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'], unique=False)

    op.create_table(
        'jobs',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('slug', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('status', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_jobs_title', 'jobs', ['title'], unique=False)
    op.create_index('ix_jobs_slug', 'jobs', ['slug'], unique=True)
    op.create_index('ix_jobs_status', 'jobs', ['status'], unique=False)
    op.create_index('ix_jobs_order', 'jobs', ['order'], unique=False)
    op.create_index('ix_jobs_created_at', 'jobs', ['created_at'], unique=False)

    op.create_table(
        'candidates',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('phone', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('job_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('stage', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('user_id', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('resume_link', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_candidates_name', 'candidates', ['name'], unique=False)
    op.create_index('ix_candidates_email', 'candidates', ['email'], unique=False)
    op.create_index('ix_candidates_job_id', 'candidates', ['job_id'], unique=False)
    op.create_index('ix_candidates_stage', 'candidates', ['stage'], unique=False)
    op.create_index('ix_candidates_user_id', 'candidates', ['user_id'], unique=False)
    op.create_index('ix_candidates_created_at', 'candidates', ['created_at'], unique=False)

    op.create_table(
        'stage_transitions',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('candidate_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('from_stage', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('to_stage', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.Column('user_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.ForeignKeyConstraint(['candidate_id'], ['candidates.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_stage_transitions_candidate_id', 'stage_transitions', ['candidate_id'], unique=False)
    op.create_index('ix_stage_transitions_timestamp', 'stage_transitions', ['timestamp'], unique=False)

    op.create_table(
        'notes',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('candidate_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('author', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('mentions', sa.JSON(), nullable=True),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['candidate_id'], ['candidates.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_notes_candidate_id', 'notes', ['candidate_id'], unique=False)
    op.create_index('ix_notes_timestamp', 'notes', ['timestamp'], unique=False)

    op.create_table(
        'assessments',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('job_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_assessments_job_id', 'assessments', ['job_id'], unique=True)

    op.create_table(
        'questions',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('assessment_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('type', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('label', sa.Text(), nullable=False),
        sa.Column('required', sa.Boolean(), nullable=False),
        sa.Column('options', sa.JSON(), nullable=True),
        sa.Column('placeholder', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('validation', sa.JSON(), nullable=True),
        sa.Column('conditional', sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(['assessment_id'], ['assessments.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_questions_assessment_id', 'questions', ['assessment_id'], unique=False)
    op.create_index('ix_questions_order', 'questions', ['order'], unique=False)

    op.create_table(
        'assessment_responses',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('assessment_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('candidate_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('answers', sa.JSON(), nullable=True),
        sa.Column('submitted_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['assessment_id'], ['assessments.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('assessment_id', 'candidate_id', name='uq_response_assessment_candidate'),
    )
    op.create_index('ix_assessment_responses_assessment_id', 'assessment_responses', ['assessment_id'], unique=False)
    op.create_index('ix_assessment_responses_candidate_id', 'assessment_responses', ['candidate_id'], unique=False)
    op.create_index('ix_assessment_responses_submitted_at', 'assessment_responses', ['submitted_at'], unique=False)

    op.create_table(
        'assessment_drafts',
        sa.Column('id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('user_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('job_id', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('answers', sa.JSON(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'job_id', name='uq_draft_user_job'),
    )
    op.create_index('ix_assessment_drafts_user_id', 'assessment_drafts', ['user_id'], unique=False)
    op.create_index('ix_assessment_drafts_job_id', 'assessment_drafts', ['job_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('assessment_drafts')
    op.drop_table('assessment_responses')
    op.drop_table('questions')
    op.drop_table('assessments')
    op.drop_table('notes')
    op.drop_table('stage_transitions')
    op.drop_table('candidates')
    op.drop_table('jobs')
    op.drop_table('users')
