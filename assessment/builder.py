"""
In-memory authoring model for one job's assessment.

The builder holds the ordered question list an admin is editing. Nothing
is persisted here; `to_payload()` produces the body of the replace (PUT)
call and `from_assessment()` loads a saved assessment back for editing.
"""

from typing import Any, Dict, List, Optional
from uuid import uuid4

from assessment.schema import (
    Answers,
    CHOICE_TYPES,
    ChoiceOption,
    Conditional,
    QuestionSpec,
    QuestionType,
    ValidationRules,
    type_value,
)
from assessment.validation import ValidationIssue, collect_validation_errors
from assessment.visibility import visible_questions

DEFAULT_LABEL = "New Question"
EDITABLE_FIELDS = ("label", "required", "placeholder", "validation", "conditional")


def _default_options() -> List[ChoiceOption]:
    return [
        ChoiceOption(id=1, text="Option 1", value=1),
        ChoiceOption(id=2, text="Option 2", value=2),
    ]


class AssessmentBuilder:
    """Editable question list of a single assessment."""

    def __init__(
        self,
        job_id: Optional[str] = None,
        title: str = "",
        description: str = "",
        questions: Optional[List[QuestionSpec]] = None,
    ):
        self.job_id = job_id
        self.title = title
        self.description = description
        self.questions: List[QuestionSpec] = list(questions or [])

    @classmethod
    def from_assessment(cls, assessment: Any, questions: Optional[List[Any]] = None) -> "AssessmentBuilder":
        """
        Load a saved assessment for editing.

        Accepts either a mapping shaped like the GET response
        ({job_id, title, description, questions}) or an Assessment row plus
        its Question rows.
        """
        if isinstance(assessment, dict):
            rows = assessment.get("questions") or []
            return cls(
                job_id=assessment.get("job_id"),
                title=assessment.get("title") or "",
                description=assessment.get("description") or "",
                questions=[QuestionSpec.model_validate(q) for q in rows],
            )

        rows = questions or []
        specs = sorted(
            (QuestionSpec.model_validate(q, from_attributes=True) for q in rows),
            key=lambda q: q.order if q.order is not None else 0,
        )
        return cls(
            job_id=assessment.job_id,
            title=assessment.title or "",
            description=assessment.description or "",
            questions=specs,
        )

    def get(self, question_id: str) -> QuestionSpec:
        for question in self.questions:
            if question.id == question_id:
                return question
        raise KeyError(f"Question not found: {question_id}")

    def _next_order(self) -> int:
        orders = [q.order for q in self.questions if q.order is not None]
        return max(orders) + 1 if orders else 0

    def add_question(self) -> QuestionSpec:
        """Append a blank short-text question at the next order position."""
        question = QuestionSpec(
            id=str(uuid4()),
            order=self._next_order(),
            type=QuestionType.SHORT_TEXT,
            label=DEFAULT_LABEL,
            required=False,
            options=None,
            placeholder="",
            validation=ValidationRules(),
            conditional=None,
        )
        self.questions.append(question)
        return question

    def change_type(self, question_id: str, new_type) -> QuestionSpec:
        """
        Switch a question's type.

        Becoming a choice type seeds two default options (existing options of
        a choice-to-choice switch are kept); leaving a choice type clears
        them. Validation and conditional are left as they are.
        """
        question = self.get(question_id)
        new_name = type_value(QuestionType(type_value(new_type)))

        if new_name in CHOICE_TYPES:
            if not question.is_choice or not question.options:
                question.options = _default_options()
        else:
            question.options = None

        question.type = new_name
        return question

    def add_option(self, question_id: str) -> ChoiceOption:
        question = self.get(question_id)
        if not question.is_choice:
            raise ValueError(f"{question.display_label}: only choice questions have options")

        options = question.options or []
        next_id = max([o.id for o in options] + [0]) + 1
        option = ChoiceOption(id=next_id, text=f"Option {next_id}", value=next_id)
        question.options = options + [option]
        return option

    def update_option(self, question_id: str, option_id: int, text: str) -> ChoiceOption:
        question = self.get(question_id)
        for option in question.options or []:
            if option.id == option_id:
                option.text = text
                return option
        raise KeyError(f"Option {option_id} not found on question {question_id}")

    def remove_option(self, question_id: str, option_id: int) -> None:
        """Drop one option. A choice question always keeps at least one."""
        question = self.get(question_id)
        remaining = [o for o in question.options or [] if o.id != option_id]
        if len(remaining) == len(question.options or []):
            raise KeyError(f"Option {option_id} not found on question {question_id}")
        if not remaining:
            raise ValueError(f"{question.display_label}: choice questions need at least one option")
        question.options = remaining

    def update_question(self, question_id: str, **changes) -> QuestionSpec:
        """Edit label, required, placeholder, validation or conditional."""
        question = self.get(question_id)
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot edit field(s): {', '.join(sorted(unknown))}")

        if "validation" in changes:
            value = changes.pop("validation")
            question.validation = value if isinstance(value, ValidationRules) else ValidationRules.model_validate(value or {})
        if "conditional" in changes:
            value = changes.pop("conditional")
            if isinstance(value, Conditional) or value is None:
                question.conditional = value
            else:
                question.conditional = Conditional.model_validate(value) if value else None

        for field, value in changes.items():
            setattr(question, field, value)
        return question

    def remove_question(self, question_id: str) -> None:
        """
        Delete a question. Remaining questions keep their order values;
        conditionals that depended on the removed question are cleared.
        """
        self.get(question_id)
        self.questions = [q for q in self.questions if q.id != question_id]
        for question in self.questions:
            if question.conditional is not None and question.conditional.depends_on == question_id:
                question.conditional = None

    def move_question(self, question_id: str, new_index: int) -> None:
        """Move a question to a list position and renumber order 0..n-1."""
        question = self.get(question_id)
        ordered = sorted(self.questions, key=lambda q: q.order if q.order is not None else 0)
        ordered.remove(question)
        new_index = max(0, min(new_index, len(ordered)))
        ordered.insert(new_index, question)
        for index, item in enumerate(ordered):
            item.order = index
        self.questions = ordered

    def preview(self, answers: Optional[Answers] = None) -> List[QuestionSpec]:
        """The questions a candidate would currently see."""
        return visible_questions(self.questions, answers or {})

    def preview_errors(self, answers: Optional[Answers] = None) -> List[ValidationIssue]:
        return collect_validation_errors(self.questions, answers or {})

    def to_payload(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "questions": [q.to_storage() for q in self.questions],
        }
