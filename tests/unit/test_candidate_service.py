"""
Unit tests for CandidateService: applications, stage transitions, notes.

Run: pytest tests/unit/test_candidate_service.py -v
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest
from services.candidate_service import extract_mentions
from services.exceptions import ConflictError, NotFoundError


@pytest.fixture
def candidate(candidate_service, job):
    return candidate_service.create_candidate(job_id=job.id, name="Emma Thompson", email="emma@example.com")


class TestCreateAndApply:

    def test_create_records_application_transition(self, candidate_service, candidate):
        assert candidate.stage == "applied"
        timeline = candidate_service.timeline(candidate.id)
        assert len(timeline) == 1
        first = timeline[0]
        assert (first.from_stage, first.to_stage) == ("applied", "applied")
        assert first.notes == "Application submitted"
        assert first.user_id == "self"

    def test_apply_uses_user_id_as_actor(self, candidate_service, job, candidate_user):
        application = candidate_service.apply(job.id, candidate_user.id, name="Casey", email="casey@example.com")
        assert application.user_id == candidate_user.id
        assert candidate_service.timeline(application.id)[0].user_id == candidate_user.id

    def test_apply_twice_conflicts(self, candidate_service, job, candidate_user):
        candidate_service.apply(job.id, candidate_user.id, name="Casey", email="casey@example.com")
        with pytest.raises(ConflictError):
            candidate_service.apply(job.id, candidate_user.id, name="Casey", email="casey@example.com")

    def test_apply_to_archived_job_conflicts(self, candidate_service, job_service, job, candidate_user):
        job_service.set_status(job.id, "archived")
        with pytest.raises(ConflictError):
            candidate_service.apply(job.id, candidate_user.id, name="Casey", email="casey@example.com")

    def test_apply_to_missing_job(self, candidate_service, candidate_user):
        with pytest.raises(NotFoundError):
            candidate_service.apply("missing", candidate_user.id, name="Casey", email="casey@example.com")

    def test_name_and_email_required(self, candidate_service, job):
        with pytest.raises(ValueError):
            candidate_service.create_candidate(job_id=job.id, name="", email="x@example.com")


class TestStageChanges:

    def test_change_stage_records_transition(self, candidate_service, candidate, admin_user):
        updated, transition = candidate_service.change_stage(candidate.id, "screen", user_id=admin_user.id, notes="Good CV")
        assert updated.stage == "screen"
        assert (transition.from_stage, transition.to_stage) == ("applied", "screen")
        assert transition.user_id == admin_user.id
        assert [t.to_stage for t in candidate_service.timeline(candidate.id)] == ["applied", "screen"]

    def test_same_stage_is_noop(self, candidate_service, candidate):
        updated, transition = candidate_service.change_stage(candidate.id, "applied")
        assert transition is None
        assert len(candidate_service.timeline(candidate.id)) == 1

    def test_invalid_stage(self, candidate_service, candidate):
        with pytest.raises(ValueError):
            candidate_service.change_stage(candidate.id, "interviewing")

    def test_profile_update_cannot_touch_stage(self, candidate_service, candidate):
        with pytest.raises(ValueError):
            candidate_service.update_candidate(candidate.id, {"stage": "hired"})

    def test_profile_update(self, candidate_service, candidate):
        updated = candidate_service.update_candidate(candidate.id, {"phone": "+15550100"})
        assert updated.phone == "+15550100"


class TestListing:

    def test_search_and_stage_filter(self, candidate_service, job):
        a = candidate_service.create_candidate(job_id=job.id, name="Emma Thompson", email="emma@example.com")
        candidate_service.create_candidate(job_id=job.id, name="James Wilson", email="james@example.com")
        candidate_service.change_stage(a.id, "tech")

        found, total = candidate_service.list_candidates(search="EMMA")
        assert total == 1 and found[0].id == a.id
        _, total = candidate_service.list_candidates(stage="tech")
        assert total == 1
        _, total = candidate_service.list_candidates(job_id=job.id)
        assert total == 2


class TestNotes:

    def test_mentions_extracted(self):
        assert extract_mentions("Ping @sam and @alex_w, then @sam again") == ["sam", "alex_w"]

    def test_add_and_list_notes(self, candidate_service, candidate):
        note = candidate_service.add_note(candidate.id, author="Ada", content="Strong system design @lee")
        assert note.mentions == ["lee"]
        assert [n.id for n in candidate_service.list_notes(candidate.id)] == [note.id]

    def test_empty_note_rejected(self, candidate_service, candidate):
        with pytest.raises(ValueError):
            candidate_service.add_note(candidate.id, author="Ada", content="   ")


class TestApplicationsForUser:

    def test_assessment_status(self, candidate_service, assessment_service, job_service, candidate_user):
        with_assessment = job_service.create_job(title="Frontend Developer")
        without_assessment = job_service.create_job(title="Accountant")
        candidate_service.apply(with_assessment.id, candidate_user.id, name="Casey", email="casey@example.com")
        candidate_service.apply(without_assessment.id, candidate_user.id, name="Casey", email="casey@example.com")
        assessment_service.save_for_job(with_assessment.id, questions=[{"id": "q1", "type": "short-text", "label": "Hi"}])

        statuses = {e["job"].title: e["assessment_status"] for e in candidate_service.applications_for_user(candidate_user.id)}
        assert statuses == {"Frontend Developer": "pending", "Accountant": "none"}

        assessment_service.submit(with_assessment.id, candidate_user.id, {"q1": "hello"})
        statuses = {e["job"].title: e["assessment_status"] for e in candidate_service.applications_for_user(candidate_user.id)}
        assert statuses["Frontend Developer"] == "submitted"
