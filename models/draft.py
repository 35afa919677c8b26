from datetime import datetime
from typing import Any, Dict
from uuid import uuid4

from sqlmodel import SQLModel, Field, Column, UniqueConstraint
from sqlalchemy import JSON


class AssessmentDraft(SQLModel, table=True):
    """In-progress answers, one slot per (user, job)."""
    __tablename__ = "assessment_drafts"
    __table_args__ = (
        UniqueConstraint("user_id", "job_id", name="uq_draft_user_job"),
    )

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    user_id: str = Field(index=True)
    job_id: str = Field(foreign_key="jobs.id", index=True)
    answers: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    updated_at: datetime = Field(default_factory=datetime.utcnow)
