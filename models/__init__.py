from models.user import User, UserRole
from models.job import Job, JobStatus
from models.candidate import Candidate, CandidateStage
from models.stage_transition import StageTransition
from models.note import Note
from models.assessment import Assessment
from models.question import Question
from models.assessment_response import AssessmentResponse
from models.draft import AssessmentDraft

__all__ = [
    "User",
    "UserRole",
    "Job",
    "JobStatus",
    "Candidate",
    "CandidateStage",
    "StageTransition",
    "Note",
    "Assessment",
    "Question",
    "AssessmentResponse",
    "AssessmentDraft",
]
