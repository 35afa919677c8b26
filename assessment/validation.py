"""
Submit-time answer validation.

Only visible questions are checked, in evaluation order. Two policies are
offered over the same rules:

- validate_answers: fail-fast, returns the first issue (used on submit)
- collect_validation_errors: every issue (used by the authoring preview)
"""

import math
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel

from assessment.schema import Answers, QuestionSpec, QuestionType, TEXT_TYPES
from assessment.visibility import QuestionLike, visible_questions


class ValidationIssue(BaseModel):
    """One rule violation, with the message shown to the candidate."""
    question_id: Optional[str] = None
    label: str
    message: str
    kind: str  # required | number | min | max | max_length


def _format_bound(bound: float) -> str:
    if isinstance(bound, float) and bound.is_integer():
        return str(int(bound))
    return str(bound)


def is_empty(value: Any) -> bool:
    """Unanswered: None, an empty list or a blank string."""
    if value is None:
        return True
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return str(value).strip() == ""


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a numeric answer, returning None when it is not a finite number.

    Numbers pass through; strings are parsed after trimming. Booleans and
    lists are never numbers.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        # float() accepts "1_000" which a form input would not
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def _check_question(question: QuestionSpec, value: Any) -> Optional[ValidationIssue]:
    label = question.display_label
    type_name = question.type_name

    def issue(message: str, kind: str) -> ValidationIssue:
        return ValidationIssue(question_id=question.id, label=label, message=message, kind=kind)

    if question.required and is_empty(value):
        return issue(f"Please answer: {label}", "required")

    rules = question.validation

    if type_name == QuestionType.NUMERIC.value:
        if is_empty(value):
            return None
        number = parse_number(value)
        if number is None:
            return issue(f"{label}: enter a valid number", "number")
        if rules.min is not None and number < rules.min:
            return issue(f"{label}: must be >= {_format_bound(rules.min)}", "min")
        if rules.max is not None and number > rules.max:
            return issue(f"{label}: must be <= {_format_bound(rules.max)}", "max")
        return None

    if type_name in TEXT_TYPES:
        if rules.max_length and value and len(str(value)) > rules.max_length:
            return issue(f"{label}: max length {rules.max_length}", "max_length")

    return None


def _issues(questions: Iterable[QuestionLike], answers: Optional[Answers]):
    answers = answers or {}
    for question in visible_questions(questions, answers):
        found = _check_question(question, answers.get(question.id))
        if found is not None:
            yield found


def validate_answers(questions: Iterable[QuestionLike], answers: Optional[Answers]) -> Optional[ValidationIssue]:
    """Return the first issue over the visible questions, or None when the answers are acceptable."""
    return next(_issues(questions, answers), None)


def collect_validation_errors(questions: Iterable[QuestionLike], answers: Optional[Answers]) -> List[ValidationIssue]:
    return list(_issues(questions, answers))
