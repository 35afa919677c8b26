"""
Typed question model shared by the assessment engine, services and API.

Questions are stored as plain rows (see models/question.py); the engine works
on these pydantic models so that visibility and validation never depend on
the database layer.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class QuestionType(str, Enum):
    """Supported question input types"""
    SINGLE_CHOICE = "single-choice"
    MULTI_CHOICE = "multi-choice"
    SHORT_TEXT = "short-text"
    LONG_TEXT = "long-text"
    NUMERIC = "numeric"
    FILE = "file"


CHOICE_TYPES = frozenset({QuestionType.SINGLE_CHOICE.value, QuestionType.MULTI_CHOICE.value})
TEXT_TYPES = frozenset({QuestionType.SHORT_TEXT.value, QuestionType.LONG_TEXT.value})


def type_value(question_type) -> str:
    """Plain string form of a question type, for set lookups and storage."""
    if isinstance(question_type, QuestionType):
        return question_type.value
    return str(question_type)


# Answer mapping: question id -> string | number | bool | list | None
Answers = Dict[str, Any]


class ChoiceOption(BaseModel):
    """One selectable option of a choice question."""
    id: int
    text: str = ""
    value: Any = None

    def model_post_init(self, __context: Any) -> None:
        if self.value is None:
            self.value = self.id


class ValidationRules(BaseModel):
    """Per-type validation settings; only the keys matching the question type are enforced."""
    model_config = ConfigDict(populate_by_name=True)

    min: Optional[float] = None
    max: Optional[float] = None
    max_length: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("max_length", "maxLength"),
    )


class Conditional(BaseModel):
    """Show the owning question only when another question's answer matches."""
    model_config = ConfigDict(populate_by_name=True)

    depends_on: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("depends_on", "dependsOn"),
    )
    condition: str = "equals"
    value: Any = None

    @field_validator("depends_on", mode="before")
    @classmethod
    def _coerce_depends_on(cls, v):
        # ids are strings everywhere; accept numeric ids from older payloads
        return None if v is None else str(v)


class QuestionSpec(BaseModel):
    """
    A question as authored and evaluated.

    `id` and `order` may be missing on questions that have not been saved
    yet; the save operation fills them in.
    """
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: Optional[str] = None
    order: Optional[int] = None
    type: QuestionType = QuestionType.SHORT_TEXT
    label: str = ""
    required: bool = False
    options: Optional[List[ChoiceOption]] = None
    placeholder: str = ""
    validation: ValidationRules = Field(default_factory=ValidationRules)
    conditional: Optional[Conditional] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        return None if v is None else str(v)

    @field_validator("validation", mode="before")
    @classmethod
    def _default_validation(cls, v):
        return v or {}

    @field_validator("conditional", mode="before")
    @classmethod
    def _empty_conditional_is_none(cls, v):
        if isinstance(v, dict) and not v:
            return None
        return v

    @property
    def display_label(self) -> str:
        return self.label or "Question"

    @property
    def type_name(self) -> str:
        return type_value(self.type)

    @property
    def is_choice(self) -> bool:
        return self.type_name in CHOICE_TYPES

    def to_storage(self) -> Dict[str, Any]:
        """Column values for models.Question (JSON-safe)."""
        data = self.model_dump(mode="json")
        data["validation"] = {k: v for k, v in data["validation"].items() if v is not None}
        return data
