from datetime import datetime
from typing import List
from uuid import uuid4

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON, Text


class Note(SQLModel, table=True):
    """Recruiter note on a candidate; `mentions` holds the @handles found in content."""
    __tablename__ = "notes"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    candidate_id: str = Field(foreign_key="candidates.id", index=True)
    author: str
    content: str = Field(sa_column=Column(Text, nullable=False))
    mentions: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    timestamp: datetime = Field(default_factory=datetime.utcnow, index=True)
