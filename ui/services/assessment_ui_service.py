"""
Service class backing the Streamlit pages.

Wraps the application services with direct database access and converts
rows to plain dictionaries so that nothing bound to a closed session
leaks into Streamlit's session state.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlmodel import Session

from api.auth import hash_api_key
from assessment import AssessmentBuilder, QuestionSpec
from repositories import UserRepository
from services import AssessmentService, CandidateService, JobService

logger = logging.getLogger(__name__)


class AssessmentUIService:
    """
    Operations used by the builder and attempt pages.

    Errors from the service layer (NotFoundError, ConflictError,
    AnswerValidationError, ...) propagate; the pages show their message.
    """

    def __init__(self, db_session: Session):
        """
        Initialize the service with a database session.

        Args:
            db_session: SQLModel database session
        """
        self.db = db_session
        self.jobs = JobService(db_session)
        self.candidates = CandidateService(db_session)
        self.assessments = AssessmentService(db_session)

    # ============ IDENTITY ============

    def resolve_user(self, raw_key: Optional[str]) -> Optional[Dict[str, Any]]:
        """Look up the active user owning an API key."""
        if not raw_key:
            return None
        user = UserRepository(self.db).get_by_hash(hash_api_key(raw_key))
        if not user or not user.is_active:
            return None
        return {"user_id": user.id, "name": user.name, "email": user.email, "role": user.role}

    # ============ JOBS ============

    def list_jobs(self, active_only: bool = True) -> List[Dict[str, Any]]:
        jobs, _ = self.jobs.list_jobs(page_size=200, include_archived=not active_only)
        return [
            {"id": job.id, "title": job.title, "slug": job.slug, "status": job.status}
            for job in jobs
        ]

    # ============ AUTHORING ============

    def load_builder(self, job_id: str) -> AssessmentBuilder:
        """Builder for a job's saved assessment, or an empty one titled after the job."""
        snapshot = self.assessments.get_for_job(job_id)
        if snapshot is None:
            job = self.jobs.get_job(job_id)
            return AssessmentBuilder(job_id=job_id, title=f"Assessment for {job.title}")
        return AssessmentBuilder.from_assessment(snapshot.model_dump(mode="json"))

    def save_builder(self, builder: AssessmentBuilder) -> AssessmentBuilder:
        """Persist the builder's question list and reload it as saved."""
        payload = builder.to_payload()
        snapshot = self.assessments.save_for_job(
            builder.job_id,
            title=payload["title"],
            description=payload["description"],
            questions=payload["questions"],
        )
        logger.info(f"Saved assessment for job {builder.job_id} from the builder")
        return AssessmentBuilder.from_assessment(snapshot.model_dump(mode="json"))

    # ============ ATTEMPT ============

    def attempt_state(self, job_id: str, user_id: str) -> Dict[str, Any]:
        state = self.assessments.attempt_state(job_id, user_id)
        return {
            "status": state.status,
            "assessment": state.assessment.model_dump(mode="json") if state.assessment else None,
            "submitted_at": state.submission.submitted_at if state.submission else None,
            "draft_answers": state.draft_answers,
        }

    def save_draft(self, user_id: str, job_id: str, answers: Dict[str, Any]) -> None:
        self.assessments.save_draft(user_id, job_id, answers)

    def submit(self, job_id: str, user_id: str, answers: Dict[str, Any]) -> Dict[str, Any]:
        response = self.assessments.submit(job_id, user_id, answers)
        return {"id": response.id, "submitted_at": response.submitted_at}

    def applications(self, user_id: str) -> List[Dict[str, Any]]:
        return [
            {
                "job_title": entry["job"].title if entry["job"] else entry["application"].job_id,
                "stage": entry["application"].stage,
                "assessment_status": entry["assessment_status"],
            }
            for entry in self.candidates.applications_for_user(user_id)
        ]

    @staticmethod
    def questions_of(assessment: Dict[str, Any]) -> List[QuestionSpec]:
        return [QuestionSpec.model_validate(q) for q in assessment.get("questions", [])]
