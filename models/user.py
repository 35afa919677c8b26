from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from sqlmodel import SQLModel, Field


class UserRole(str, Enum):
    """Who is acting: recruiters administer jobs, candidates apply."""
    ADMIN = "admin"
    CANDIDATE = "candidate"


class User(SQLModel, table=True):
    """Acting identity behind an API key.

    There is no password login; each user owns one hashed API key which the
    API resolves into an explicit session context on every request.
    """

    __tablename__ = "users"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    email: str = Field(index=True, nullable=False, sa_column_kwargs={"unique": True})
    name: str = Field(default="", nullable=False)
    role: str = Field(default=UserRole.CANDIDATE.value, index=True)
    key_hash: str = Field(index=True, nullable=False, sa_column_kwargs={"unique": True})
    is_active: bool = Field(default=True, nullable=False)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
    last_used_at: Optional[datetime] = Field(default=None, nullable=True)
