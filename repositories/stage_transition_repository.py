from typing import List

from sqlmodel import Session, select

from models.stage_transition import StageTransition
from repositories.base_repository import BaseRepository


class StageTransitionRepository(BaseRepository[StageTransition]):
    """Append-only stage history."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, StageTransition)

    def list_for_candidate(self, candidate_id: str) -> List[StageTransition]:
        """Transitions of a candidate, oldest first."""
        statement = (
            select(StageTransition)
            .where(StageTransition.candidate_id == candidate_id)
            .order_by(StageTransition.timestamp.asc())
        )
        return list(self.db.exec(statement).all())
