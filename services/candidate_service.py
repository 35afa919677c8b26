"""
Candidate Service - Business Logic Layer.

Applications, the stage pipeline and recruiter notes. Stage is only ever
changed here, and every change is written together with its
StageTransition record in one commit.
"""

import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlmodel import Session

from config.settings import settings
from models.candidate import Candidate, CandidateStage
from models.job import JobStatus
from models.note import Note
from models.stage_transition import StageTransition
from repositories import (
    AssessmentRepository,
    CandidateRepository,
    JobRepository,
    NoteRepository,
    ResponseRepository,
    StageTransitionRepository,
)
from services.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

MENTION_PATTERN = re.compile(r"@(\w+)")
PROFILE_FIELDS = ("name", "email", "phone", "resume_link")
APPLICATION_NOTE = "Application submitted"
ANONYMOUS_ACTOR = "self"


def extract_mentions(content: str) -> List[str]:
    """@handles in a note, unique, in order of appearance."""
    mentions: List[str] = []
    for handle in MENTION_PATTERN.findall(content or ""):
        if handle not in mentions:
            mentions.append(handle)
    return mentions


def _check_stage(stage: str) -> str:
    allowed = [s.value for s in CandidateStage]
    if stage not in allowed:
        raise ValueError(f"Invalid stage '{stage}'. Must be one of: {', '.join(allowed)}")
    return stage


class CandidateService:
    """Application service for candidates and their pipeline history."""

    def __init__(self, db_session: Session):
        self.db = db_session
        self.candidates = CandidateRepository(db_session)
        self.jobs = JobRepository(db_session)
        self.transitions = StageTransitionRepository(db_session)
        self.notes = NoteRepository(db_session)

    def list_candidates(
        self,
        search: Optional[str] = None,
        stage: Optional[str] = None,
        job_id: Optional[str] = None,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> Tuple[List[Candidate], int]:
        if stage:
            _check_stage(stage)
        page = max(page, 1)
        page_size = min(page_size or settings.DEFAULT_CANDIDATE_PAGE_SIZE, settings.MAX_PAGE_SIZE)
        return self.candidates.search(
            search=search.strip() if search else None,
            stage=stage,
            job_id=job_id,
            offset=(page - 1) * page_size,
            limit=page_size,
        )

    def get_candidate(self, candidate_id: str) -> Candidate:
        candidate = self.candidates.get_by_id(candidate_id)
        if not candidate:
            raise NotFoundError("Candidate", candidate_id)
        return candidate

    def create_candidate(
        self,
        job_id: str,
        name: str,
        email: str,
        phone: str = "",
        resume_link: str = "",
        user_id: Optional[str] = None,
    ) -> Candidate:
        """
        Record a new application in the applied stage.

        Writes the candidate and its initial applied -> applied transition in
        one transaction.
        """
        if not self.jobs.get_by_id(job_id):
            raise NotFoundError("Job", job_id)
        name = (name or "").strip()
        email = (email or "").strip()
        if not name or not email:
            raise ValueError("Name and email are required")

        candidate = Candidate(
            name=name,
            email=email,
            phone=phone or "",
            resume_link=resume_link or "",
            job_id=job_id,
            user_id=user_id,
            stage=CandidateStage.APPLIED.value,
        )
        try:
            self.candidates.add(candidate)
            self.transitions.add(StageTransition(
                candidate_id=candidate.id,
                from_stage=CandidateStage.APPLIED.value,
                to_stage=CandidateStage.APPLIED.value,
                user_id=user_id or ANONYMOUS_ACTOR,
                notes=APPLICATION_NOTE,
            ))
            self.candidates.commit()
        except Exception:
            self.candidates.rollback()
            raise

        self.db.refresh(candidate)
        logger.info(f"Created candidate {candidate.id} for job {job_id}")
        return candidate

    def apply(
        self,
        job_id: str,
        user_id: str,
        name: str,
        email: str,
        phone: str = "",
        resume_link: str = "",
    ) -> Candidate:
        """Self-service application: the job must be active and the user must not have applied yet."""
        job = self.jobs.get_by_id(job_id)
        if not job:
            raise NotFoundError("Job", job_id)
        if job.status != JobStatus.ACTIVE.value:
            logger.warning(f"User {user_id} tried to apply to archived job {job_id}")
            raise ConflictError(f"Job is not accepting applications: {job.title}")
        if self.candidates.get_by_user_and_job(user_id, job_id):
            logger.warning(f"User {user_id} already applied to job {job_id}")
            raise ConflictError("You have already applied to this job")

        return self.create_candidate(
            job_id=job_id,
            name=name,
            email=email,
            phone=phone,
            resume_link=resume_link,
            user_id=user_id,
        )

    def update_candidate(self, candidate_id: str, changes: Dict[str, Any]) -> Candidate:
        """Edit profile fields. Stage changes go through change_stage."""
        candidate = self.get_candidate(candidate_id)
        if "stage" in changes:
            raise ValueError("Stage can only be changed through a stage transition")
        unknown = set(changes) - set(PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        for field, value in changes.items():
            setattr(candidate, field, value if value is not None else "")
        candidate.updated_at = datetime.utcnow()
        return self.candidates.update(candidate)

    def change_stage(
        self,
        candidate_id: str,
        to_stage: str,
        user_id: Optional[str] = None,
        notes: str = "",
    ) -> Tuple[Candidate, Optional[StageTransition]]:
        """
        Move a candidate to another stage.

        Returns:
            (candidate, transition); transition is None when the candidate
            was already in that stage.
        """
        _check_stage(to_stage)
        candidate = self.get_candidate(candidate_id)
        from_stage = candidate.stage
        if from_stage == to_stage:
            return candidate, None

        transition = StageTransition(
            candidate_id=candidate.id,
            from_stage=from_stage,
            to_stage=to_stage,
            user_id=user_id or ANONYMOUS_ACTOR,
            notes=notes or "",
        )
        candidate.stage = to_stage
        candidate.updated_at = datetime.utcnow()
        try:
            self.candidates.add(candidate)
            self.transitions.add(transition)
            self.candidates.commit()
        except Exception:
            self.candidates.rollback()
            raise

        self.db.refresh(candidate)
        self.db.refresh(transition)
        logger.info(f"Candidate {candidate.id} moved {from_stage} -> {to_stage}")
        return candidate, transition

    def timeline(self, candidate_id: str) -> List[StageTransition]:
        self.get_candidate(candidate_id)
        return self.transitions.list_for_candidate(candidate_id)

    def add_note(self, candidate_id: str, author: str, content: str) -> Note:
        self.get_candidate(candidate_id)
        content = (content or "").strip()
        if not content:
            raise ValueError("Note content is required")
        note = Note(
            candidate_id=candidate_id,
            author=author,
            content=content,
            mentions=extract_mentions(content),
        )
        return self.notes.create(note)

    def list_notes(self, candidate_id: str) -> List[Note]:
        self.get_candidate(candidate_id)
        return self.notes.list_for_candidate(candidate_id)

    def applications_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        """
        The "applied jobs" list of a user.

        Each entry holds the application, its job and the assessment status
        for that job: "none" (job has no assessment), "pending" or
        "submitted".
        """
        applications = self.candidates.list_by_user(user_id)
        if not applications:
            return []

        job_ids = [a.job_id for a in applications]
        assessments = {a.job_id: a for a in AssessmentRepository(self.db).list_by_job_ids(job_ids)}
        submitted = {r.assessment_id for r in ResponseRepository(self.db).list_for_candidate(user_id)}

        entries = []
        for application in applications:
            assessment = assessments.get(application.job_id)
            if assessment is None:
                status = "none"
            elif assessment.id in submitted:
                status = "submitted"
            else:
                status = "pending"
            entries.append({
                "application": application,
                "job": self.jobs.get_by_id(application.job_id),
                "assessment_status": status,
            })
        return entries
