"""
Assessment Service - Business Logic Layer.

Owns the assessment lifecycle for a job:
- authoring: create-or-replace the assessment and its whole question set
  in a single transaction
- attempting: per-(user, job) drafts, attempt state, and submission with
  validation over the visible questions
- review: submissions of a job with the candidate that sent them

Submitting is terminal. The pre-check on existing responses gives a clean
error in the common case; the unique constraint on (assessment_id,
candidate_id) decides the race between two concurrent submits.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from assessment import (
    QuestionSpec,
    ValidationIssue,
    check_question_set,
    collect_validation_errors,
    validate_answers,
    visible_question_ids,
)
from models.assessment import Assessment
from models.assessment_response import AssessmentResponse
from models.candidate import Candidate
from models.draft import AssessmentDraft
from models.question import Question
from repositories import (
    AssessmentRepository,
    CandidateRepository,
    DraftRepository,
    JobRepository,
    QuestionRepository,
    ResponseRepository,
)
from services.exceptions import (
    AnswerValidationError,
    AssessmentDefinitionError,
    ConflictError,
    DuplicateSubmissionError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

ATTEMPT_UNAVAILABLE = "unavailable"
ATTEMPT_DRAFTING = "drafting"
ATTEMPT_SUBMITTED = "submitted"


class AssessmentSnapshot(BaseModel):
    """An assessment with its questions in evaluation order."""
    id: str
    job_id: str
    title: str
    description: str = ""
    created_at: datetime
    updated_at: datetime
    questions: List[QuestionSpec]


class Submission(BaseModel):
    """A stored response plus the application of the user who sent it."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    response: AssessmentResponse
    candidate: Optional[Candidate] = None


class AttemptState(BaseModel):
    """What the attempt screen should show for one user and job."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: str
    assessment: Optional[AssessmentSnapshot] = None
    submission: Optional[AssessmentResponse] = None
    draft_answers: Dict[str, Any] = {}
    visible_question_ids: List[str] = []


class PreviewResult(BaseModel):
    visible_question_ids: List[str]
    errors: List[ValidationIssue]
    first_error: Optional[ValidationIssue] = None


def _as_specs(questions: List[Any]) -> List[QuestionSpec]:
    return [q if isinstance(q, QuestionSpec) else QuestionSpec.model_validate(q) for q in questions or []]


class AssessmentService:
    """Application service for assessments, drafts and submissions."""

    def __init__(self, db_session: Session):
        self.db = db_session
        self.jobs = JobRepository(db_session)
        self.assessments = AssessmentRepository(db_session)
        self.questions = QuestionRepository(db_session)
        self.responses = ResponseRepository(db_session)
        self.drafts = DraftRepository(db_session)
        self.candidates = CandidateRepository(db_session)

    def _require_job(self, job_id: str):
        job = self.jobs.get_by_id(job_id)
        if not job:
            raise NotFoundError("Job", job_id)
        return job

    def _snapshot(self, assessment: Assessment) -> AssessmentSnapshot:
        rows = self.questions.list_for_assessment(assessment.id)
        return AssessmentSnapshot(
            id=assessment.id,
            job_id=assessment.job_id,
            title=assessment.title,
            description=assessment.description or "",
            created_at=assessment.created_at,
            updated_at=assessment.updated_at,
            questions=[QuestionSpec.model_validate(row, from_attributes=True) for row in rows],
        )

    def get_for_job(self, job_id: str) -> Optional[AssessmentSnapshot]:
        """The job's assessment, or None when the job has none."""
        assessment = self.assessments.get_by_job_id(job_id)
        if assessment is None:
            return None
        return self._snapshot(assessment)

    def _require_assessment(self, job_id: str) -> Assessment:
        assessment = self.assessments.get_by_job_id(job_id)
        if assessment is None:
            raise NotFoundError("Assessment", job_id)
        return assessment

    def save_for_job(
        self,
        job_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        questions: Optional[List[Any]] = None,
    ) -> AssessmentSnapshot:
        """
        Create or replace a job's assessment.

        Title defaults to "Assessment for <job title>". Questions replace the
        previous set wholesale; a question without an id gets a UUID and one
        without an order gets its list index.

        Raises:
            NotFoundError: job does not exist
            AssessmentDefinitionError: the question set is inconsistent
            ConflictError: a question id belongs to another assessment
        """
        job = self._require_job(job_id)

        specs = _as_specs(questions)
        for index, spec in enumerate(specs):
            if not spec.id:
                spec.id = str(uuid4())
            if spec.order is None:
                spec.order = index

        problems = check_question_set(specs)
        if problems:
            logger.warning(f"Rejected assessment for job {job_id}: {'; '.join(problems)}")
            raise AssessmentDefinitionError(problems)

        assessment = self.assessments.get_by_job_id(job_id)
        foreign = [
            q.id for q in self.questions.get_many([s.id for s in specs])
            if assessment is None or q.assessment_id != assessment.id
        ]
        if foreign:
            raise ConflictError(f"Question id(s) already used by another assessment: {', '.join(foreign)}")

        now = datetime.utcnow()
        try:
            if assessment is None:
                assessment = Assessment(job_id=job_id, title="", created_at=now)
            assessment.title = (title or "").strip() or f"Assessment for {job.title}"
            assessment.description = description or ""
            assessment.updated_at = now
            self.assessments.add(assessment)

            removed = self.questions.stage_delete_for_assessment(assessment.id)
            self.questions.stage_add_all([
                Question(assessment_id=assessment.id, **spec.to_storage()) for spec in specs
            ])
            self.assessments.commit()
        except Exception:
            self.assessments.rollback()
            logger.exception(f"Failed to save assessment for job {job_id}")
            raise

        logger.info(
            f"Saved assessment {assessment.id} for job {job_id}: "
            f"{len(specs)} question(s), replaced {removed}"
        )
        return self._snapshot(assessment)

    def list_submissions(self, job_id: str) -> List[Submission]:
        """Responses for the job's assessment, newest first."""
        self._require_job(job_id)
        assessment = self.assessments.get_by_job_id(job_id)
        if assessment is None:
            return []

        submissions = []
        for response in self.responses.list_for_assessment(assessment.id):
            candidate = self.candidates.get_by_user_and_job(response.candidate_id, job_id)
            submissions.append(Submission(response=response, candidate=candidate))
        return submissions

    def submit(self, job_id: str, user_id: str, answers: Dict[str, Any]) -> AssessmentResponse:
        """
        Validate and store a user's answers, then clear their draft.

        Raises:
            NotFoundError: the job has no assessment
            DuplicateSubmissionError: the user already submitted
            AnswerValidationError: first rule broken by a visible question
        """
        assessment = self._require_assessment(job_id)
        if self.responses.get_for_candidate(assessment.id, user_id):
            logger.warning(f"User {user_id} tried to resubmit assessment {assessment.id}")
            raise DuplicateSubmissionError("Assessment already submitted")

        answers = dict(answers or {})
        questions = self.questions.list_for_assessment(assessment.id)
        issue = validate_answers(questions, answers)
        if issue is not None:
            logger.info(f"Submission by {user_id} for assessment {assessment.id} rejected: {issue.message}")
            raise AnswerValidationError(issue.message, question_id=issue.question_id)

        response = AssessmentResponse(
            assessment_id=assessment.id,
            candidate_id=user_id,
            answers=answers,
        )
        try:
            self.responses.add(response)
            draft = self.drafts.get_for(user_id, job_id)
            if draft is not None:
                self.drafts.remove(draft)
            self.responses.commit()
        except IntegrityError:
            self.responses.rollback()
            logger.warning(f"Concurrent duplicate submission by {user_id} for assessment {assessment.id}")
            raise DuplicateSubmissionError("Assessment already submitted")
        except Exception:
            self.responses.rollback()
            raise

        self.db.refresh(response)
        logger.info(f"Stored submission {response.id} for assessment {assessment.id} by {user_id}")
        return response

    def attempt_state(self, job_id: str, user_id: str) -> AttemptState:
        """
        Decide what the attempt screen shows.

        - unavailable: the job has no assessment
        - submitted: the user already submitted; no form
        - drafting: the form, with the restored draft and the questions
          visible for it
        """
        self._require_job(job_id)
        snapshot = self.get_for_job(job_id)
        if snapshot is None:
            return AttemptState(status=ATTEMPT_UNAVAILABLE)

        response = self.responses.get_for_candidate(snapshot.id, user_id)
        if response is not None:
            return AttemptState(status=ATTEMPT_SUBMITTED, assessment=snapshot, submission=response)

        draft = self.drafts.get_for(user_id, job_id)
        answers = dict(draft.answers) if draft else {}
        return AttemptState(
            status=ATTEMPT_DRAFTING,
            assessment=snapshot,
            draft_answers=answers,
            visible_question_ids=visible_question_ids(snapshot.questions, answers),
        )

    def get_draft(self, user_id: str, job_id: str) -> Optional[AssessmentDraft]:
        return self.drafts.get_for(user_id, job_id)

    def save_draft(self, user_id: str, job_id: str, answers: Dict[str, Any]) -> AssessmentDraft:
        """Overwrite the user's draft slot for a job."""
        self._require_job(job_id)
        assessment = self.assessments.get_by_job_id(job_id)
        if assessment is not None and self.responses.get_for_candidate(assessment.id, user_id):
            raise DuplicateSubmissionError("Assessment already submitted")

        draft = self.drafts.get_for(user_id, job_id)
        if draft is None:
            draft = AssessmentDraft(user_id=user_id, job_id=job_id)
        # reassign so the JSON column is marked dirty
        draft.answers = dict(answers or {})
        draft.updated_at = datetime.utcnow()
        try:
            return self.drafts.update(draft)
        except IntegrityError:
            # another request created the slot first; write into it
            self.drafts.rollback()
            draft = self.drafts.get_for(user_id, job_id)
            draft.answers = dict(answers or {})
            draft.updated_at = datetime.utcnow()
            return self.drafts.update(draft)

    def clear_draft(self, user_id: str, job_id: str) -> bool:
        draft = self.drafts.get_for(user_id, job_id)
        if draft is None:
            return False
        return self.drafts.delete(draft)

    def preview(self, questions: List[Any], answers: Optional[Dict[str, Any]] = None) -> PreviewResult:
        """Visibility and every validation issue for an unsaved question list."""
        specs = _as_specs(questions)
        answers = answers or {}
        errors = collect_validation_errors(specs, answers)
        return PreviewResult(
            visible_question_ids=visible_question_ids(specs, answers),
            errors=errors,
            first_error=errors[0] if errors else None,
        )
