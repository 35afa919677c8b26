from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from sqlmodel import SQLModel, Field


class CandidateStage(str, Enum):
    """Pipeline stages, in pipeline order."""
    APPLIED = "applied"
    SCREEN = "screen"
    TECH = "tech"
    OFFER = "offer"
    HIRED = "hired"
    REJECTED = "rejected"


class Candidate(SQLModel, table=True):
    """An application of one person to one job.

    `stage` is only changed through CandidateService.change_stage so that
    every move is mirrored by a StageTransition row.
    """
    __tablename__ = "candidates"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str = Field(index=True)
    email: str = Field(index=True)
    phone: str = Field(default="")
    job_id: str = Field(foreign_key="jobs.id", index=True)
    stage: str = Field(default=CandidateStage.APPLIED.value, index=True)
    user_id: Optional[str] = Field(default=None, foreign_key="users.id", index=True, nullable=True)
    resume_link: str = Field(default="")
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
