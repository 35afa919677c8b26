from typing import Optional

from sqlmodel import Session, select

from models.draft import AssessmentDraft
from repositories.base_repository import BaseRepository


class DraftRepository(BaseRepository[AssessmentDraft]):
    """Per-(user, job) autosave slots."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, AssessmentDraft)

    def get_for(self, user_id: str, job_id: str) -> Optional[AssessmentDraft]:
        statement = select(AssessmentDraft).where(
            AssessmentDraft.user_id == user_id,
            AssessmentDraft.job_id == job_id,
        )
        return self.db.exec(statement).first()
