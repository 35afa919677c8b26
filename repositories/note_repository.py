from typing import List

from sqlmodel import Session, select

from models.note import Note
from repositories.base_repository import BaseRepository


class NoteRepository(BaseRepository[Note]):

    def __init__(self, db_session: Session):
        super().__init__(db_session, Note)

    def list_for_candidate(self, candidate_id: str) -> List[Note]:
        """Notes on a candidate, newest first."""
        statement = (
            select(Note)
            .where(Note.candidate_id == candidate_id)
            .order_by(Note.timestamp.desc())
        )
        return list(self.db.exec(statement).all())
