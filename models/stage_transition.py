from datetime import datetime
from uuid import uuid4

from sqlmodel import SQLModel, Field


class StageTransition(SQLModel, table=True):
    """
    Append-only audit log of candidate stage changes.

    Application time writes one applied -> applied record; every later stage
    change writes exactly one record.
    """
    __tablename__ = "stage_transitions"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    candidate_id: str = Field(foreign_key="candidates.id", index=True)
    from_stage: str
    to_stage: str
    timestamp: datetime = Field(default_factory=datetime.utcnow, index=True)
    user_id: str = Field(default="self")  # acting user id, or "self" for anonymous applications
    notes: str = Field(default="")
