from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON, Text


class JobStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"


class Job(SQLModel, table=True):
    """
    A job posting owned by the admins.

    `slug` is derived from the title on create and must stay unique;
    `order` is the display position used by the drag-reorder listing.
    """
    __tablename__ = "jobs"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    title: str = Field(index=True)
    slug: str = Field(index=True, sa_column_kwargs={"unique": True})
    status: str = Field(default=JobStatus.ACTIVE.value, index=True)
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    order: int = Field(default=0, index=True)
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
