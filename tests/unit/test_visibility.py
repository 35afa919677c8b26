"""
Unit tests for conditional visibility.

Run: pytest tests/unit/test_visibility.py -v
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest
from assessment import QuestionSpec, is_visible, strict_equals, visible_question_ids, visible_questions


def conditional_question(depends_on="q1", value=1, condition="equals", qid="q2", order=1):
    return QuestionSpec(
        id=qid,
        order=order,
        type="short-text",
        label="Follow-up",
        conditional={"depends_on": depends_on, "condition": condition, "value": value},
    )


# ---------------------------------------------------------------------------
# strict_equals
# ---------------------------------------------------------------------------

class TestStrictEquals:

    @pytest.mark.parametrize("left,right", [
        (1, 1),
        (1, 1.0),
        ("Yes", "Yes"),
        (None, None),
        (True, True),
    ])
    def test_equal_values(self, left, right):
        assert strict_equals(left, right)

    @pytest.mark.parametrize("left,right", [
        ("1", 1),
        (1, "1"),
        (True, 1),
        (0, False),
        (None, ""),
        ("", None),
        ("yes", "Yes"),
        ([1], [1]),
        ({"a": 1}, {"a": 1}),
        (float("nan"), float("nan")),
    ])
    def test_unequal_values(self, left, right):
        assert not strict_equals(left, right)


# ---------------------------------------------------------------------------
# is_visible
# ---------------------------------------------------------------------------

class TestIsVisible:

    @pytest.mark.parametrize("answers", [{}, None, {"q1": "anything"}, {"q2": [1, 2]}])
    def test_no_conditional_always_visible(self, answers):
        question = QuestionSpec(id="q1", order=0, type="numeric", label="Age")
        assert is_visible(question, answers) is True

    def test_matching_answer_shows_question(self):
        assert is_visible(conditional_question(value=1), {"q1": 1}) is True

    def test_other_answer_hides_question(self):
        assert is_visible(conditional_question(value=1), {"q1": 2}) is False

    def test_string_answer_does_not_match_number(self):
        assert is_visible(conditional_question(value=1), {"q1": "1"}) is False

    def test_missing_answer_hides_question(self):
        assert is_visible(conditional_question(value="Yes"), {}) is False

    def test_missing_answer_matches_none_value(self):
        assert is_visible(conditional_question(value=None), {}) is True

    def test_unknown_condition_is_visible(self):
        question = conditional_question(condition="contains", value="x")
        assert is_visible(question, {"q1": "nope"}) is True

    def test_accepts_plain_mapping_and_camel_case_keys(self):
        question = {
            "id": "q2",
            "order": 1,
            "type": "short-text",
            "label": "Follow-up",
            "conditional": {"dependsOn": "q1", "condition": "equals", "value": "Yes"},
        }
        assert is_visible(question, {"q1": "Yes"}) is True
        assert is_visible(question, {"q1": "No"}) is False

    def test_numeric_depends_on_is_coerced_to_string(self):
        question = QuestionSpec(
            id="5", order=5, type="short-text",
            conditional={"depends_on": 1, "condition": "equals", "value": "Yes"},
        )
        assert question.conditional.depends_on == "1"
        assert is_visible(question, {"1": "Yes"}) is True


# ---------------------------------------------------------------------------
# visible_questions
# ---------------------------------------------------------------------------

def choice_scenario():
    q1 = QuestionSpec(
        id="q1", order=0, type="single-choice", label="Pick one", required=True,
        options=[{"id": 1, "text": "One", "value": 1}, {"id": 2, "text": "Two", "value": 2}],
    )
    q2 = QuestionSpec(
        id="q2", order=1, type="short-text", label="Tell us more", required=True,
        conditional={"depends_on": "q1", "condition": "equals", "value": 1},
    )
    return [q1, q2]


class TestVisibleQuestions:

    def test_scenario_hidden_when_answer_differs(self):
        assert visible_question_ids(choice_scenario(), {"q1": 2}) == ["q1"]

    def test_scenario_shown_when_answer_matches(self):
        assert visible_question_ids(choice_scenario(), {"q1": 1}) == ["q1", "q2"]

    def test_evaluates_in_order_not_list_position(self):
        q1, q2 = choice_scenario()
        assert visible_question_ids([q2, q1], {"q1": 1}) == ["q1", "q2"]

    def test_hidden_question_answer_still_feeds_dependants(self):
        q1, q2 = choice_scenario()
        q3 = QuestionSpec(
            id="q3", order=2, type="short-text", label="Deeper", required=True,
            conditional={"depends_on": "q2", "condition": "equals", "value": "x"},
        )
        # q2 is hidden, but its stored answer is still what q3 reads
        assert visible_question_ids([q1, q2, q3], {"q1": 2, "q2": "x"}) == ["q1", "q3"]
        assert visible_question_ids([q1, q2, q3], {"q1": 1, "q2": "x"}) == ["q1", "q2", "q3"]
        assert visible_question_ids([q1, q2, q3], {"q1": 2, "q2": "y"}) == ["q1"]

    def test_chain_agrees_with_single_question_check(self):
        q1, q2 = choice_scenario()
        q3 = QuestionSpec(
            id="q3", order=2, type="short-text",
            conditional={"depends_on": "q2", "condition": "equals", "value": "x"},
        )
        answers = {"q1": 2, "q2": "x"}
        shown = visible_question_ids([q1, q2, q3], answers)
        for question in (q1, q2, q3):
            assert (question.id in shown) == is_visible(question, answers)

    def test_equal_order_dependency_follows_list_position(self):
        first = QuestionSpec(id="first", order=1, type="short-text")
        twin = QuestionSpec(
            id="twin", order=1, type="short-text",
            conditional={"depends_on": "first", "condition": "equals", "value": "Yes"},
        )
        # equal orders keep list position, so "twin" comes second and sees the answer
        assert visible_question_ids([first, twin], {"first": "Yes"}) == ["first", "twin"]
        assert visible_question_ids([twin, first], {"first": "Yes"}) == ["first"]

    def test_forward_reference_counts_as_unanswered(self):
        early = QuestionSpec(
            id="early", order=0, type="short-text",
            conditional={"depends_on": "late", "condition": "equals", "value": "Yes"},
        )
        late = QuestionSpec(id="late", order=1, type="short-text")
        assert visible_question_ids([early, late], {"late": "Yes"}) == ["late"]

    def test_dangling_dependency_is_visible(self):
        orphan = QuestionSpec(
            id="orphan", order=3, type="short-text",
            conditional={"depends_on": "deleted", "condition": "equals", "value": "Yes"},
        )
        assert visible_question_ids([orphan], {}) == ["orphan"]

    def test_questions_without_order_keep_list_position(self):
        a = QuestionSpec(id="a", type="short-text")
        b = QuestionSpec(id="b", type="short-text")
        assert [q.id for q in visible_questions([a, b], {})] == ["a", "b"]

    def test_dangling_dependency_reads_as_unanswered_on_its_own(self):
        orphan = QuestionSpec(
            id="orphan", order=3, type="short-text",
            conditional={"depends_on": "deleted", "condition": "equals", "value": "Yes"},
        )
        # without the rest of the set there is nothing to resolve the reference against
        assert is_visible(orphan, {}) is False
        assert visible_question_ids([orphan], {}) == ["orphan"]
