"""
Conditional visibility evaluation.

A question is shown when it has no conditional, or when the answer of the
question it depends on strictly equals the conditional value. Equality is
type-sensitive: the string "1" never matches the number 1 and a boolean
never matches a number.
"""

import logging
import math
from typing import Any, Iterable, List, Mapping, Optional, Union

from assessment.schema import Answers, QuestionSpec

logger = logging.getLogger(__name__)

EQUALS = "equals"

QuestionLike = Union[QuestionSpec, Mapping[str, Any], Any]


def _as_spec(question: QuestionLike) -> QuestionSpec:
    if isinstance(question, QuestionSpec):
        return question
    if isinstance(question, Mapping):
        return QuestionSpec.model_validate(dict(question))
    return QuestionSpec.model_validate(question, from_attributes=True)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strict_equals(left: Any, right: Any) -> bool:
    """
    Type-sensitive equality for answer values.

    - bool only equals bool
    - int and float compare numerically (1 == 1.0), NaN equals nothing
    - lists and dicts never compare equal, not even to an equal list
    - everything else requires the same type and an equal value
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if _is_number(left) and _is_number(right):
        if isinstance(left, float) and math.isnan(left):
            return False
        return left == right
    if isinstance(left, (list, dict)) or isinstance(right, (list, dict)):
        return False
    if left is None or right is None:
        return left is None and right is None
    return type(left) is type(right) and left == right


def is_visible(question: QuestionLike, answers: Optional[Answers]) -> bool:
    """
    Whether a single question is shown for the given answers.

    A missing answer is treated as None, so a conditional whose value is
    None matches an unanswered dependency. Condition keywords other than
    "equals" are not errors; the question stays visible.

    This looks at one question only and cannot tell whether `depends_on`
    names a question that still exists; a dangling reference reads as an
    unanswered dependency here. `visible_questions` resolves references
    against the whole set and shows such questions.
    """
    spec = _as_spec(question)
    conditional = spec.conditional
    if conditional is None:
        return True

    if conditional.condition != EQUALS:
        return True

    current = (answers or {}).get(conditional.depends_on)
    return strict_equals(current, conditional.value)


def _sorted_for_evaluation(questions: List[QuestionSpec]) -> List[QuestionSpec]:
    # Stable: questions without an order keep their list position
    keyed = [
        (q.order if q.order is not None else index, index, q)
        for index, q in enumerate(questions)
    ]
    keyed.sort(key=lambda item: (item[0], item[1]))
    return [q for _, _, q in keyed]


def visible_questions(questions: Iterable[QuestionLike], answers: Optional[Answers]) -> List[QuestionSpec]:
    """
    Evaluate a whole question set in ascending order.

    Each conditional reads the stored answer of the question it depends
    on, whether or not that question is itself visible. Only questions
    earlier in the order count: an answer to the same or a later question
    is treated as absent. A conditional that points at a question id not
    present in the set is treated as always visible.
    """
    answers = answers or {}
    specs = _sorted_for_evaluation([_as_spec(q) for q in questions])
    position = {q.id: index for index, q in enumerate(specs) if q.id is not None}

    visible: List[QuestionSpec] = []
    for index, question in enumerate(specs):
        conditional = question.conditional
        if conditional is None:
            shown = True
        elif conditional.depends_on not in position:
            logger.debug(f"Question {question.id} depends on unknown question {conditional.depends_on}; showing it")
            shown = True
        elif position[conditional.depends_on] >= index:
            shown = is_visible(question, {})
        else:
            shown = is_visible(question, answers)

        if shown:
            visible.append(question)

    return visible


def visible_question_ids(questions: Iterable[QuestionLike], answers: Optional[Answers]) -> List[str]:
    return [q.id for q in visible_questions(questions, answers) if q.id is not None]
