from assessment.schema import (
    Answers,
    ChoiceOption,
    Conditional,
    QuestionSpec,
    QuestionType,
    ValidationRules,
)
from assessment.visibility import is_visible, strict_equals, visible_question_ids, visible_questions
from assessment.validation import ValidationIssue, collect_validation_errors, validate_answers
from assessment.integrity import check_question_set
from assessment.builder import AssessmentBuilder

__all__ = [
    "Answers",
    "ChoiceOption",
    "Conditional",
    "QuestionSpec",
    "QuestionType",
    "ValidationRules",
    "is_visible",
    "strict_equals",
    "visible_questions",
    "visible_question_ids",
    "ValidationIssue",
    "validate_answers",
    "collect_validation_errors",
    "check_question_set",
    "AssessmentBuilder",
]
