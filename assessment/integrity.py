"""Structural checks run on an authored question set before it is saved."""

from typing import Dict, List, Sequence

from assessment.schema import QuestionSpec
from assessment.visibility import EQUALS


def check_question_set(questions: Sequence[QuestionSpec]) -> List[str]:
    """
    Return the problems found in a question set, empty when it can be saved.

    Questions must already carry their final id and order.
    """
    problems: List[str] = []

    by_id: Dict[str, QuestionSpec] = {}
    for question in questions:
        if question.id in by_id:
            problems.append(f"Duplicate question id {question.id}")
            continue
        by_id[question.id] = question

    for question in questions:
        name = question.display_label

        if question.is_choice and not question.options:
            problems.append(f"{name}: choice questions need at least one option")

        conditional = question.conditional
        if conditional is None:
            continue
        if conditional.condition != EQUALS:
            # unknown conditions evaluate as visible; nothing to cross-check
            continue

        target = by_id.get(conditional.depends_on)
        if conditional.depends_on is None:
            problems.append(f"{name}: conditional is missing the question it depends on")
        elif conditional.depends_on == question.id:
            problems.append(f"{name}: a question cannot depend on itself")
        elif target is None:
            problems.append(f"{name}: depends on unknown question {conditional.depends_on}")
        elif target.order >= question.order:
            problems.append(f"{name}: can only depend on an earlier question")

    return problems
