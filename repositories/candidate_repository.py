"""
Candidate (application) repository.

Handles CRUD operations for the candidates table and the admin listing.
"""

from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlmodel import Session, select

from models.candidate import Candidate
from repositories.base_repository import BaseRepository


class CandidateRepository(BaseRepository[Candidate]):
    """Repository for managing candidates."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, Candidate)

    def get_by_user_and_job(self, user_id: str, job_id: str) -> Optional[Candidate]:
        """The application a user made to a job, if any."""
        statement = select(Candidate).where(
            Candidate.user_id == user_id,
            Candidate.job_id == job_id,
        )
        return self.db.exec(statement).first()

    def list_by_user(self, user_id: str) -> List[Candidate]:
        statement = (
            select(Candidate)
            .where(Candidate.user_id == user_id)
            .order_by(Candidate.created_at.desc())
        )
        return list(self.db.exec(statement).all())

    def get_many(self, ids: List[str]) -> List[Candidate]:
        if not ids:
            return []
        return list(self.db.exec(select(Candidate).where(Candidate.id.in_(ids))).all())

    def search(
        self,
        search: Optional[str] = None,
        stage: Optional[str] = None,
        job_id: Optional[str] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> Tuple[List[Candidate], int]:
        """
        Filter and paginate candidates, newest first.

        Args:
            search: Case-insensitive substring of name or email
            stage: Pipeline stage filter
            job_id: Only applications to this job
            offset: Number of records to skip
            limit: Page size

        Returns:
            Tuple of (candidates on the page, total matching)
        """
        statement = select(Candidate)
        if search:
            pattern = f"%{search.lower()}%"
            statement = statement.where(
                or_(func.lower(Candidate.name).like(pattern), func.lower(Candidate.email).like(pattern))
            )
        if stage:
            statement = statement.where(Candidate.stage == stage)
        if job_id:
            statement = statement.where(Candidate.job_id == job_id)

        total = self.db.exec(select(func.count()).select_from(statement.subquery())).one()
        statement = statement.order_by(Candidate.created_at.desc()).offset(offset).limit(limit)
        return list(self.db.exec(statement).all()), total
