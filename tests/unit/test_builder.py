"""
Unit tests for the in-memory assessment authoring model.

Run: pytest tests/unit/test_builder.py -v
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest
from assessment import AssessmentBuilder, QuestionSpec, check_question_set


@pytest.fixture
def builder():
    return AssessmentBuilder(job_id="job-1", title="Screening")


class TestAddQuestion:

    def test_defaults(self, builder):
        question = builder.add_question()
        assert question.type_name == "short-text"
        assert question.label == "New Question"
        assert question.required is False
        assert question.options is None
        assert question.conditional is None
        assert question.placeholder == ""
        assert question.order == 0
        assert question.id

    def test_next_order_and_unique_ids(self, builder):
        first = builder.add_question()
        second = builder.add_question()
        assert second.order == first.order + 1
        assert first.id != second.id

    def test_order_follows_highest_after_removal(self, builder):
        a = builder.add_question()
        builder.add_question()
        builder.add_question()
        builder.remove_question(a.id)
        assert builder.add_question().order == 3


class TestChangeType:

    def test_into_choice_seeds_two_options(self, builder):
        question = builder.add_question()
        builder.change_type(question.id, "single-choice")
        assert [(o.id, o.text, o.value) for o in question.options] == [
            (1, "Option 1", 1),
            (2, "Option 2", 2),
        ]

    def test_out_of_choice_clears_options(self, builder):
        question = builder.add_question()
        builder.change_type(question.id, "multi-choice")
        builder.change_type(question.id, "numeric")
        assert question.options is None
        assert question.type_name == "numeric"

    def test_choice_to_choice_keeps_options(self, builder):
        question = builder.add_question()
        builder.change_type(question.id, "single-choice")
        builder.add_option(question.id)
        builder.change_type(question.id, "multi-choice")
        assert len(question.options) == 3

    def test_validation_and_conditional_untouched(self, builder):
        gate = builder.add_question()
        question = builder.add_question()
        builder.update_question(
            question.id,
            validation={"max_length": 10},
            conditional={"depends_on": gate.id, "condition": "equals", "value": "Yes"},
        )
        builder.change_type(question.id, "numeric")
        assert question.validation.max_length == 10
        assert question.conditional.depends_on == gate.id

    def test_unknown_type_rejected(self, builder):
        question = builder.add_question()
        with pytest.raises(ValueError):
            builder.change_type(question.id, "dropdown")


class TestOptions:

    def test_add_option_uses_max_id_plus_one(self, builder):
        question = builder.add_question()
        builder.change_type(question.id, "single-choice")
        builder.remove_option(question.id, 1)
        option = builder.add_option(question.id)
        assert (option.id, option.text, option.value) == (3, "Option 3", 3)

    def test_last_option_cannot_be_removed(self, builder):
        question = builder.add_question()
        builder.change_type(question.id, "single-choice")
        builder.remove_option(question.id, 1)
        with pytest.raises(ValueError):
            builder.remove_option(question.id, 2)
        assert [o.id for o in question.options] == [2]
        assert builder.preview() == [question]
        assert check_question_set(builder.questions) == []

    def test_update_option_text(self, builder):
        question = builder.add_question()
        builder.change_type(question.id, "single-choice")
        builder.update_option(question.id, 2, "Maybe")
        assert question.options[1].text == "Maybe"
        assert question.options[1].value == 2

    def test_add_option_to_text_question_rejected(self, builder):
        question = builder.add_question()
        with pytest.raises(ValueError):
            builder.add_option(question.id)

    def test_unknown_option(self, builder):
        question = builder.add_question()
        builder.change_type(question.id, "single-choice")
        with pytest.raises(KeyError):
            builder.update_option(question.id, 99, "x")


class TestRemoveAndMove:

    def test_remove_does_not_renumber(self, builder):
        a, b, c = builder.add_question(), builder.add_question(), builder.add_question()
        builder.remove_question(b.id)
        assert [q.order for q in builder.questions] == [0, 2]

    def test_remove_clears_dependent_conditionals(self, builder):
        gate = builder.add_question()
        follow_up = builder.add_question()
        builder.update_question(follow_up.id, conditional={"depends_on": gate.id, "value": "Yes"})
        builder.remove_question(gate.id)
        assert follow_up.conditional is None

    def test_remove_unknown_question(self, builder):
        with pytest.raises(KeyError):
            builder.remove_question("missing")

    def test_move_renumbers(self, builder):
        a, b, c = builder.add_question(), builder.add_question(), builder.add_question()
        builder.move_question(c.id, 0)
        assert [q.id for q in builder.questions] == [c.id, a.id, b.id]
        assert [q.order for q in builder.questions] == [0, 1, 2]


class TestUpdateAndPreview:

    def test_update_rejects_unknown_fields(self, builder):
        question = builder.add_question()
        with pytest.raises(ValueError):
            builder.update_question(question.id, id="other")

    def test_preview_matches_visibility(self, builder):
        gate = builder.add_question()
        builder.change_type(gate.id, "single-choice")
        follow_up = builder.add_question()
        builder.update_question(follow_up.id, required=True,
                                conditional={"depends_on": gate.id, "condition": "equals", "value": 1})

        assert [q.id for q in builder.preview({gate.id: 2})] == [gate.id]
        assert [q.id for q in builder.preview({gate.id: 1})] == [gate.id, follow_up.id]
        assert [e.question_id for e in builder.preview_errors({gate.id: 1})] == [follow_up.id]


class TestPayload:

    def test_round_trip_through_payload(self, builder):
        question = builder.add_question()
        builder.change_type(question.id, "numeric")
        builder.update_question(question.id, label="Years", validation={"min": 0, "max": 50})

        payload = builder.to_payload()
        assert payload["title"] == "Screening"
        stored = payload["questions"][0]
        assert stored["type"] == "numeric"
        assert stored["validation"] == {"min": 0, "max": 50}

        loaded = AssessmentBuilder.from_assessment({"job_id": "job-1", **payload})
        assert loaded.questions[0] == QuestionSpec.model_validate(stored)
