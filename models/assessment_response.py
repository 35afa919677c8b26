from datetime import datetime
from typing import Any, Dict
from uuid import uuid4

from sqlmodel import SQLModel, Field, Column, UniqueConstraint
from sqlalchemy import JSON


class AssessmentResponse(SQLModel, table=True):
    """
    A candidate's submitted assessment. Immutable once written.

    The unique constraint makes "one submission per candidate per assessment"
    hold even when two submits race each other.
    """
    __tablename__ = "assessment_responses"
    __table_args__ = (
        UniqueConstraint("assessment_id", "candidate_id", name="uq_response_assessment_candidate"),
    )

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    assessment_id: str = Field(foreign_key="assessments.id", index=True)
    candidate_id: str = Field(index=True)  # submitting user's id
    answers: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    submitted_at: datetime = Field(default_factory=datetime.utcnow, index=True)
