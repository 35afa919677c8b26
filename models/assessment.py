from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import Text


class Assessment(SQLModel, table=True):
    """
    The assessment attached to a job. At most one per job: saving for a job
    that already has one replaces its title, description and question set.
    """
    __tablename__ = "assessments"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    job_id: str = Field(foreign_key="jobs.id", index=True, sa_column_kwargs={"unique": True})
    title: str
    description: Optional[str] = Field(default="", sa_column=Column(Text))
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
