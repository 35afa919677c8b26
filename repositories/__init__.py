"""
Repositories module - Data Access Layer.

Provides repository classes for database operations following the Repository pattern.
Each repository handles CRUD operations for a specific domain entity.

Usage:
    from repositories import JobRepository, CandidateRepository

    # Initialize with a database session
    job_repo = JobRepository(db_session)
    candidate_repo = CandidateRepository(db_session)

    # Use repository methods
    job = job_repo.get_by_slug("senior-frontend-developer")
    candidates, total = candidate_repo.search(stage="screen")
"""

from repositories.base_repository import BaseRepository
from repositories.user_repository import UserRepository
from repositories.job_repository import JobRepository
from repositories.candidate_repository import CandidateRepository
from repositories.stage_transition_repository import StageTransitionRepository
from repositories.note_repository import NoteRepository
from repositories.assessment_repository import AssessmentRepository, QuestionRepository
from repositories.response_repository import ResponseRepository
from repositories.draft_repository import DraftRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "JobRepository",
    "CandidateRepository",
    "StageTransitionRepository",
    "NoteRepository",
    "AssessmentRepository",
    "QuestionRepository",
    "ResponseRepository",
    "DraftRepository",
]
