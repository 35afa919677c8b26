from typing import Any, Dict, List, Optional
from uuid import uuid4

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON, Text


class Question(SQLModel, table=True):
    """
    One question of an assessment.

    JSON columns:
        options:     [{"id": 1, "text": "Option 1", "value": 1}, ...] or null (choice types only)
        validation:  {"min": 0, "max": 50, "max_length": 100}; keys only matter for matching types
        conditional: {"depends_on": "<question id>", "condition": "equals", "value": ...} or null
    """
    __tablename__ = "questions"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    assessment_id: str = Field(foreign_key="assessments.id", index=True)
    order: int = Field(default=0, index=True)
    type: str = Field(default="short-text")
    label: str = Field(default="", sa_column=Column(Text, nullable=False))
    required: bool = Field(default=False)
    options: Optional[List[Dict[str, Any]]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    placeholder: str = Field(default="")
    validation: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    conditional: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
