"""
Assessment authoring, attempt and submission routes.

Domain errors are not converted here: AnswerValidationError (422 with the
failing question id), AssessmentDefinitionError (422 with the problem
list), DuplicateSubmissionError (409) and NotFoundError (404) reach the
client through the handlers in api/errors.py.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from api.auth import UserContext, require_admin, verify_api_key
from api.models.assessment_schemas import (
    AnswersRequest,
    AssessmentResponseModel,
    AssessmentSaveRequest,
    AttemptResponse,
    DraftResponse,
    PreviewRequest,
    PreviewResponse,
    SubmissionResponse,
    SubmissionWithCandidate,
)
from api.models.candidate_schemas import CandidateResponse
from api.simulation import simulated_assessment_save, simulated_read, simulated_write
from services.assessment_service import AssessmentService
from utils.database import get_db

router = APIRouter(
    prefix="/assessments",
    tags=["Assessments"],
    dependencies=[Depends(verify_api_key)]
)


def _to_response(snapshot) -> Optional[AssessmentResponseModel]:
    if snapshot is None:
        return None
    return AssessmentResponseModel(**snapshot.model_dump(exclude={"questions"}), questions=snapshot.questions)


@router.get("/{job_id}", response_model=Optional[AssessmentResponseModel], dependencies=[Depends(simulated_read)])
def get_assessment(job_id: str, db: Session = Depends(get_db)):
    """The job's assessment with ordered questions, or `null` when none has been authored."""
    return _to_response(AssessmentService(db).get_for_job(job_id))


@router.put("/{job_id}", response_model=AssessmentResponseModel, dependencies=[Depends(simulated_assessment_save)])
def save_assessment(
    job_id: str,
    request: AssessmentSaveRequest,
    admin: UserContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """
    Create or fully replace the job's assessment.

    The previous question set is discarded; questions without an id get one
    and questions without an order take their list position. Inconsistent
    question sets (duplicate ids, conditionals on unknown or later questions,
    choice questions without options) are rejected with 422.
    """
    snapshot = AssessmentService(db).save_for_job(
        job_id,
        title=request.title,
        description=request.description,
        questions=request.questions,
    )
    return _to_response(snapshot)


@router.post("/{job_id}/preview", response_model=PreviewResponse)
def preview_assessment(
    job_id: str,
    request: PreviewRequest,
    admin: UserContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Which questions a candidate would see for the sample answers, and every validation issue."""
    result = AssessmentService(db).preview(request.questions, request.answers)
    return PreviewResponse(**result.model_dump())


@router.post("/{job_id}/submit", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(simulated_write)])
def submit_assessment(
    job_id: str,
    request: AnswersRequest,
    user: UserContext = Depends(verify_api_key),
    db: Session = Depends(get_db),
):
    """
    Submit answers once.

    422 carries the first failing question; 409 means the caller already
    submitted. On success the caller's draft for this job is cleared.
    """
    response = AssessmentService(db).submit(job_id, user.user_id, request.answers)
    return SubmissionResponse.model_validate(response)


@router.get("/{job_id}/submissions", response_model=List[SubmissionWithCandidate],
            dependencies=[Depends(simulated_read)])
def list_submissions(
    job_id: str,
    admin: UserContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    submissions = AssessmentService(db).list_submissions(job_id)
    return [
        SubmissionWithCandidate(
            submission=SubmissionResponse.model_validate(s.response),
            candidate=CandidateResponse.model_validate(s.candidate) if s.candidate else None,
        )
        for s in submissions
    ]


@router.get("/{job_id}/attempt", response_model=AttemptResponse, dependencies=[Depends(simulated_read)])
def get_attempt(
    job_id: str,
    user: UserContext = Depends(verify_api_key),
    db: Session = Depends(get_db),
):
    """Attempt state for the caller: unavailable, drafting (with restored draft) or submitted."""
    state = AssessmentService(db).attempt_state(job_id, user.user_id)
    return AttemptResponse(
        status=state.status,
        assessment=_to_response(state.assessment),
        submission=SubmissionResponse.model_validate(state.submission) if state.submission else None,
        draft_answers=state.draft_answers,
        visible_question_ids=state.visible_question_ids,
    )


@router.get("/{job_id}/draft", response_model=Optional[DraftResponse])
def get_draft(
    job_id: str,
    user: UserContext = Depends(verify_api_key),
    db: Session = Depends(get_db),
):
    draft = AssessmentService(db).get_draft(user.user_id, job_id)
    return DraftResponse.model_validate(draft) if draft else None


@router.put("/{job_id}/draft", response_model=DraftResponse)
def save_draft(
    job_id: str,
    request: AnswersRequest,
    user: UserContext = Depends(verify_api_key),
    db: Session = Depends(get_db),
):
    """Autosave: overwrite the caller's draft slot for this job."""
    draft = AssessmentService(db).save_draft(user.user_id, job_id, request.answers)
    return DraftResponse.model_validate(draft)


@router.delete("/{job_id}/draft", status_code=status.HTTP_204_NO_CONTENT)
def clear_draft(
    job_id: str,
    user: UserContext = Depends(verify_api_key),
    db: Session = Depends(get_db),
):
    AssessmentService(db).clear_draft(user.user_id, job_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
