"""
API tests for assessment authoring, attempts and submission.

Run: pytest tests/integration/test_api_assessments.py -v
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest

from config.settings import settings


QUESTIONS = [
    {
        "id": "q1", "order": 0, "type": "single-choice", "label": "Are you authorized to work?",
        "required": True,
        "options": [{"id": 1, "text": "Yes", "value": "Yes"}, {"id": 2, "text": "No", "value": "No"}],
    },
    {
        "id": "q2", "order": 1, "type": "short-text", "label": "Visa type", "required": True,
        "conditional": {"dependsOn": "q1", "condition": "equals", "value": "No"},
    },
    {
        "id": "q3", "order": 2, "type": "numeric", "label": "Years of experience",
        "validation": {"min": 0, "max": 50},
    },
    {
        "id": "q4", "order": 3, "type": "short-text", "label": "Current city",
        "validation": {"maxLength": 100},
    },
]


@pytest.fixture
def assessment(client, admin_headers, job):
    response = client.put(
        f"/assessments/{job.id}",
        json={"title": "Backend screening", "questions": QUESTIONS},
        headers=admin_headers,
    )
    assert response.status_code == 200
    return response.json()


def submit(client, job, headers, answers):
    return client.post(f"/assessments/{job.id}/submit", json={"answers": answers}, headers=headers)


class TestAuthoring:

    def test_get_without_assessment_is_null(self, client, admin_headers, job):
        response = client.get(f"/assessments/{job.id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() is None

    def test_put_then_get(self, client, admin_headers, job, assessment):
        body = client.get(f"/assessments/{job.id}", headers=admin_headers).json()
        assert body["title"] == "Backend screening"
        assert [q["id"] for q in body["questions"]] == ["q1", "q2", "q3", "q4"]
        assert body["questions"][1]["conditional"]["depends_on"] == "q1"
        assert body["questions"][3]["validation"]["max_length"] == 100

    def test_put_twice_replaces(self, client, admin_headers, job, assessment):
        response = client.put(f"/assessments/{job.id}", json={"questions": QUESTIONS[2:3]}, headers=admin_headers)
        body = response.json()
        assert body["id"] == assessment["id"]
        assert body["title"] == "Assessment for Backend Engineer"
        assert [q["id"] for q in body["questions"]] == ["q3"]

    def test_candidate_cannot_author(self, client, candidate_headers, job):
        response = client.put(f"/assessments/{job.id}", json={"questions": []}, headers=candidate_headers)
        assert response.status_code == 403

    def test_inconsistent_definition_is_422(self, client, admin_headers, job):
        forward = dict(QUESTIONS[0], conditional={"depends_on": "q3", "condition": "equals", "value": 1})
        response = client.put(f"/assessments/{job.id}", json={"questions": [forward, QUESTIONS[2]]},
                              headers=admin_headers)
        assert response.status_code == 422
        assert response.json()["problems"] == ["Are you authorized to work?: can only depend on an earlier question"]

    def test_preview(self, client, admin_headers, job):
        response = client.post(
            f"/assessments/{job.id}/preview",
            json={"questions": QUESTIONS, "answers": {"q1": "No", "q3": "abc"}},
            headers=admin_headers,
        )
        body = response.json()
        assert body["visible_question_ids"] == ["q1", "q2", "q3", "q4"]
        assert [e["question_id"] for e in body["errors"]] == ["q2", "q3"]
        assert body["first_error"]["message"] == "Please answer: Visa type"


class TestConditionalFlow:

    def test_follow_up_hidden_then_required(self, client, candidate_headers, job, assessment):
        state = client.put(f"/assessments/{job.id}/draft", json={"answers": {"q1": "Yes"}},
                           headers=candidate_headers)
        assert state.status_code == 200
        attempt = client.get(f"/assessments/{job.id}/attempt", headers=candidate_headers).json()
        assert attempt["status"] == "drafting"
        assert attempt["visible_question_ids"] == ["q1", "q3", "q4"]

        client.put(f"/assessments/{job.id}/draft", json={"answers": {"q1": "No"}}, headers=candidate_headers)
        attempt = client.get(f"/assessments/{job.id}/attempt", headers=candidate_headers).json()
        assert attempt["draft_answers"] == {"q1": "No"}
        assert attempt["visible_question_ids"] == ["q1", "q2", "q3", "q4"]

        response = submit(client, job, candidate_headers, {"q1": "No"})
        assert response.status_code == 422
        assert response.json() == {"detail": "Please answer: Visa type", "question_id": "q2"}

    def test_hidden_required_question_does_not_block(self, client, candidate_headers, job, assessment):
        assert submit(client, job, candidate_headers, {"q1": "Yes"}).status_code == 201


class TestValidationRules:

    @pytest.mark.parametrize("years,status_code", [("51", 422), ("50", 201), ("abc", 422), ("0", 201)])
    def test_numeric_bounds(self, client, candidate_headers, job, assessment, years, status_code):
        response = submit(client, job, candidate_headers, {"q1": "Yes", "q3": years})
        assert response.status_code == status_code

    @pytest.mark.parametrize("length,status_code", [(101, 422), (100, 201)])
    def test_short_text_max_length(self, client, candidate_headers, job, assessment, length, status_code):
        response = submit(client, job, candidate_headers, {"q1": "Yes", "q4": "x" * length})
        assert response.status_code == status_code
        if status_code == 422:
            assert response.json()["detail"] == "Current city: max length 100"


class TestSubmission:

    def test_submit_once(self, client, candidate_headers, job, assessment):
        client.put(f"/assessments/{job.id}/draft", json={"answers": {"q1": "Yes"}}, headers=candidate_headers)
        first = submit(client, job, candidate_headers, {"q1": "Yes", "q3": 7})
        assert first.status_code == 201
        assert first.json()["answers"] == {"q1": "Yes", "q3": 7}

        second = submit(client, job, candidate_headers, {"q1": "Yes"})
        assert second.status_code == 409

        attempt = client.get(f"/assessments/{job.id}/attempt", headers=candidate_headers).json()
        assert attempt["status"] == "submitted"
        assert attempt["submission"]["id"] == first.json()["id"]
        assert client.get(f"/assessments/{job.id}/draft", headers=candidate_headers).json() is None

    def test_submissions_listing_is_admin_only(self, client, admin_headers, candidate_headers, job, assessment):
        client.post(f"/jobs/{job.id}/apply", json={}, headers=candidate_headers)
        submit(client, job, candidate_headers, {"q1": "Yes"})
        assert client.get(f"/assessments/{job.id}/submissions", headers=candidate_headers).status_code == 403
        listing = client.get(f"/assessments/{job.id}/submissions", headers=admin_headers).json()
        assert len(listing) == 1
        assert listing[0]["candidate"]["name"] == "Casey Candidate"

    def test_submit_without_assessment_is_404(self, client, candidate_headers, job):
        assert submit(client, job, candidate_headers, {}).status_code == 404

    def test_attempt_unavailable(self, client, candidate_headers, job):
        body = client.get(f"/assessments/{job.id}/attempt", headers=candidate_headers).json()
        assert body["status"] == "unavailable"


class TestDrafts:

    def test_drafts_are_isolated_per_user(self, client, candidate_headers, other_candidate_headers, job, assessment):
        client.put(f"/assessments/{job.id}/draft", json={"answers": {"q1": "No"}}, headers=candidate_headers)
        assert client.get(f"/assessments/{job.id}/draft", headers=other_candidate_headers).json() is None

    def test_delete_draft(self, client, candidate_headers, job, assessment):
        client.put(f"/assessments/{job.id}/draft", json={"answers": {"q1": "No"}}, headers=candidate_headers)
        assert client.delete(f"/assessments/{job.id}/draft", headers=candidate_headers).status_code == 204
        assert client.get(f"/assessments/{job.id}/draft", headers=candidate_headers).json() is None


class TestSimulatedNetwork:

    def test_write_failure_maps_to_503(self, client, monkeypatch, candidate_headers, job, assessment):
        monkeypatch.setattr(settings, "SIMULATE_NETWORK", True)
        monkeypatch.setattr(settings, "LATENCY_MIN_MS", 0)
        monkeypatch.setattr(settings, "LATENCY_MAX_MS", 0)
        monkeypatch.setattr(settings, "WRITE_FAILURE_RATE", 1.0)

        response = submit(client, job, candidate_headers, {"q1": "Yes"})
        assert response.status_code == 503

        monkeypatch.setattr(settings, "WRITE_FAILURE_RATE", 0.0)
        assert submit(client, job, candidate_headers, {"q1": "Yes"}).status_code == 201
