from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from api.models.candidate_schemas import CandidateResponse
from assessment import QuestionSpec, ValidationIssue


class AssessmentSaveRequest(BaseModel):
    """Full replace of a job's assessment"""
    title: Optional[str] = Field(None, description="Defaults to 'Assessment for <job title>'")
    description: Optional[str] = Field("", description="Shown above the questions")
    questions: List[QuestionSpec] = Field(default_factory=list, description="Questions in any order; missing ids are assigned")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "title": "Frontend screening",
            "questions": [
                {
                    "type": "single-choice",
                    "label": "Have you shipped React in production?",
                    "required": True,
                    "options": [{"id": 1, "text": "Yes", "value": "Yes"}, {"id": 2, "text": "No", "value": "No"}],
                },
                {
                    "id": "q-years",
                    "type": "numeric",
                    "label": "Years of experience",
                    "validation": {"min": 0, "max": 50},
                },
            ],
        }
    })


class AssessmentResponseModel(BaseModel):
    """An assessment with its questions in evaluation order"""
    id: str
    job_id: str
    title: str
    description: str
    created_at: datetime
    updated_at: datetime
    questions: List[QuestionSpec]


class AnswersRequest(BaseModel):
    answers: Dict[str, Any] = Field(default_factory=dict, description="Question id -> answer")


class PreviewRequest(BaseModel):
    """Unsaved questions plus sample answers"""
    questions: List[QuestionSpec] = Field(default_factory=list)
    answers: Dict[str, Any] = Field(default_factory=dict)


class PreviewResponse(BaseModel):
    visible_question_ids: List[str]
    errors: List[ValidationIssue]
    first_error: Optional[ValidationIssue] = None


class SubmissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    assessment_id: str
    candidate_id: str
    answers: Dict[str, Any]
    submitted_at: datetime


class SubmissionWithCandidate(BaseModel):
    submission: SubmissionResponse
    candidate: Optional[CandidateResponse] = None


class DraftResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    job_id: str
    answers: Dict[str, Any]
    updated_at: datetime


class AttemptResponse(BaseModel):
    """What the attempt screen renders"""
    status: str = Field(..., description="unavailable, drafting or submitted")
    assessment: Optional[AssessmentResponseModel] = None
    submission: Optional[SubmissionResponse] = None
    draft_answers: Dict[str, Any] = Field(default_factory=dict)
    visible_question_ids: List[str] = Field(default_factory=list)
