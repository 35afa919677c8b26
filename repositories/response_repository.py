from typing import List, Optional

from sqlmodel import Session, select

from models.assessment_response import AssessmentResponse
from repositories.base_repository import BaseRepository


class ResponseRepository(BaseRepository[AssessmentResponse]):
    """Submitted assessment responses (immutable, so no update helpers)."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, AssessmentResponse)

    def get_for_candidate(self, assessment_id: str, candidate_id: str) -> Optional[AssessmentResponse]:
        statement = select(AssessmentResponse).where(
            AssessmentResponse.assessment_id == assessment_id,
            AssessmentResponse.candidate_id == candidate_id,
        )
        return self.db.exec(statement).first()

    def list_for_assessment(self, assessment_id: str) -> List[AssessmentResponse]:
        statement = (
            select(AssessmentResponse)
            .where(AssessmentResponse.assessment_id == assessment_id)
            .order_by(AssessmentResponse.submitted_at.desc())
        )
        return list(self.db.exec(statement).all())

    def list_for_candidate(self, candidate_id: str) -> List[AssessmentResponse]:
        statement = select(AssessmentResponse).where(AssessmentResponse.candidate_id == candidate_id)
        return list(self.db.exec(statement).all())
