"""
Assessment and question repositories.

Questions are only ever replaced as a whole set, so QuestionRepository
exposes staged (non-committing) bulk operations used inside the
AssessmentService save transaction.
"""

from typing import List, Optional

from sqlmodel import Session, select

from models.assessment import Assessment
from models.question import Question
from repositories.base_repository import BaseRepository


class AssessmentRepository(BaseRepository[Assessment]):
    """Repository for assessments (at most one per job)."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, Assessment)

    def get_by_job_id(self, job_id: str) -> Optional[Assessment]:
        return self.db.exec(
            select(Assessment).where(Assessment.job_id == job_id)
        ).first()

    def list_by_job_ids(self, job_ids: List[str]) -> List[Assessment]:
        if not job_ids:
            return []
        return list(self.db.exec(select(Assessment).where(Assessment.job_id.in_(job_ids))).all())


class QuestionRepository(BaseRepository[Question]):
    """Repository for assessment questions."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, Question)

    def list_for_assessment(self, assessment_id: str) -> List[Question]:
        """Questions of an assessment in evaluation order."""
        statement = (
            select(Question)
            .where(Question.assessment_id == assessment_id)
            .order_by(Question.order.asc())
        )
        return list(self.db.exec(statement).all())

    def get_many(self, ids: List[str]) -> List[Question]:
        if not ids:
            return []
        return list(self.db.exec(select(Question).where(Question.id.in_(ids))).all())

    def stage_delete_for_assessment(self, assessment_id: str) -> int:
        """Delete every question of an assessment without committing."""
        questions = self.list_for_assessment(assessment_id)
        for question in questions:
            self.db.delete(question)
        self.db.flush()
        return len(questions)

    def stage_add_all(self, questions: List[Question]) -> None:
        self.db.add_all(questions)
        self.db.flush()
