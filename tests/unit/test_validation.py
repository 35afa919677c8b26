"""
Unit tests for submit-time answer validation.

Run: pytest tests/unit/test_validation.py -v
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest
from assessment import QuestionSpec, collect_validation_errors, validate_answers
from assessment.validation import is_empty, parse_number


def numeric(min=None, max=None, required=False):
    return QuestionSpec(
        id="years", order=0, type="numeric", label="Years", required=required,
        validation={"min": min, "max": max},
    )


def short_text(max_length=None, required=False):
    return QuestionSpec(
        id="city", order=0, type="short-text", label="City", required=required,
        validation={"maxLength": max_length},
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestHelpers:

    @pytest.mark.parametrize("value", [None, "", "   ", [], ()])
    def test_empty_values(self, value):
        assert is_empty(value)

    @pytest.mark.parametrize("value", [0, False, "0", [0], "a"])
    def test_non_empty_values(self, value):
        assert not is_empty(value)

    @pytest.mark.parametrize("value,expected", [
        ("50", 50.0),
        (" 7.5 ", 7.5),
        (3, 3.0),
        ("-1", -1.0),
        ("1e2", 100.0),
    ])
    def test_parse_number(self, value, expected):
        assert parse_number(value) == expected

    @pytest.mark.parametrize("value", ["abc", "inf", "nan", "1_000", True, [1], {"a": 1}])
    def test_parse_number_rejects(self, value):
        assert parse_number(value) is None


# ---------------------------------------------------------------------------
# Required
# ---------------------------------------------------------------------------

class TestRequired:

    @pytest.mark.parametrize("value", [None, "", "  ", []])
    def test_required_empty_fails(self, value):
        issue = validate_answers([short_text(required=True)], {"city": value})
        assert issue is not None
        assert issue.message == "Please answer: City"
        assert issue.question_id == "city"
        assert issue.kind == "required"

    def test_missing_label_uses_generic_name(self):
        question = QuestionSpec(id="x", order=0, type="file", required=True)
        assert validate_answers([question], {}).message == "Please answer: Question"

    def test_required_multi_choice_with_selection_passes(self):
        question = QuestionSpec(
            id="langs", order=0, type="multi-choice", label="Languages", required=True,
            options=[{"id": 1, "text": "Python", "value": 1}],
        )
        assert validate_answers([question], {"langs": [1]}) is None

    def test_hidden_required_question_is_not_checked(self):
        gate = QuestionSpec(id="gate", order=0, type="single-choice", label="Gate",
                            options=[{"id": 1, "text": "Yes", "value": "Yes"}])
        follow_up = QuestionSpec(
            id="more", order=1, type="long-text", label="More", required=True,
            conditional={"depends_on": "gate", "condition": "equals", "value": "Yes"},
        )
        assert validate_answers([gate, follow_up], {"gate": "No"}) is None
        assert validate_answers([gate, follow_up], {"gate": "Yes"}).message == "Please answer: More"

    def test_dependant_of_hidden_question_is_checked(self):
        gate = QuestionSpec(id="q1", order=0, type="single-choice", label="Q1",
                            options=[{"id": 1, "text": "One", "value": 1}, {"id": 2, "text": "Two", "value": 2}])
        middle = QuestionSpec(id="q2", order=1, type="short-text", label="Q2",
                              conditional={"depends_on": "q1", "condition": "equals", "value": 1})
        last = QuestionSpec(id="q3", order=2, type="short-text", label="Q3", required=True,
                            conditional={"depends_on": "q2", "condition": "equals", "value": "x"})
        issue = validate_answers([gate, middle, last], {"q1": 2, "q2": "x"})
        assert issue.message == "Please answer: Q3"
        assert issue.question_id == "q3"

    def test_optional_empty_passes(self):
        assert validate_answers([short_text(max_length=5)], {}) is None


# ---------------------------------------------------------------------------
# Numeric
# ---------------------------------------------------------------------------

class TestNumeric:

    @pytest.mark.parametrize("value", ["0", "50", 0, 50, "25.5"])
    def test_inclusive_bounds_pass(self, value):
        assert validate_answers([numeric(min=0, max=50)], {"years": value}) is None

    def test_above_max_fails(self):
        issue = validate_answers([numeric(min=0, max=50)], {"years": "51"})
        assert issue.message == "Years: must be <= 50"
        assert issue.kind == "max"

    def test_below_min_fails(self):
        issue = validate_answers([numeric(min=0, max=50)], {"years": -1})
        assert issue.message == "Years: must be >= 0"
        assert issue.kind == "min"

    def test_not_a_number_fails(self):
        issue = validate_answers([numeric(min=0, max=50)], {"years": "abc"})
        assert issue.message == "Years: enter a valid number"
        assert issue.kind == "number"

    def test_fractional_bound_is_shown_as_is(self):
        issue = validate_answers([numeric(max=2.5)], {"years": "3"})
        assert issue.message == "Years: must be <= 2.5"

    def test_unanswered_optional_numeric_passes(self):
        assert validate_answers([numeric(min=0, max=50)], {"years": ""}) is None

    def test_no_bounds_accepts_any_finite_number(self):
        assert validate_answers([numeric()], {"years": "-1000000"}) is None


# ---------------------------------------------------------------------------
# Text length
# ---------------------------------------------------------------------------

class TestTextLength:

    def test_at_limit_passes(self):
        assert validate_answers([short_text(max_length=100)], {"city": "a" * 100}) is None

    def test_over_limit_fails(self):
        issue = validate_answers([short_text(max_length=100)], {"city": "a" * 101})
        assert issue.message == "City: max length 100"
        assert issue.kind == "max_length"

    def test_long_text_limit(self):
        question = QuestionSpec(id="bio", order=0, type="long-text", label="Bio", validation={"max_length": 500})
        assert validate_answers([question], {"bio": "x" * 501}).message == "Bio: max length 500"

    def test_length_ignored_for_other_types(self):
        question = QuestionSpec(id="n", order=0, type="numeric", label="N", validation={"max_length": 1})
        assert validate_answers([question], {"n": "12345"}) is None


# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------

class TestPolicies:

    def questions(self):
        return [
            QuestionSpec(id="a", order=0, type="short-text", label="A", required=True),
            QuestionSpec(id="b", order=1, type="numeric", label="B", validation={"max": 1}),
            QuestionSpec(id="c", order=2, type="short-text", label="C", validation={"max_length": 2}),
        ]

    def test_fail_fast_returns_first_in_order(self):
        answers = {"b": "5", "c": "toolong"}
        assert validate_answers(self.questions(), answers).question_id == "a"

    def test_collect_all_returns_every_issue_in_order(self):
        answers = {"b": "5", "c": "toolong"}
        errors = collect_validation_errors(self.questions(), answers)
        assert [e.question_id for e in errors] == ["a", "b", "c"]

    def test_valid_answers(self):
        assert collect_validation_errors(self.questions(), {"a": "ok", "b": 1, "c": "ok"}) == []
