from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from api.models.common_schemas import Pagination
from api.models.job_schemas import JobResponse
from models.candidate import CandidateStage


class CandidateCreate(BaseModel):
    """Admin entry of an application"""
    job_id: str = Field(..., description="Job the candidate applies to")
    name: str = Field(..., min_length=1, description="Candidate name")
    email: str = Field(..., min_length=3, description="Candidate email")
    phone: str = Field("", description="Phone number")
    resume_link: str = Field("", description="Link to a resume")


class CandidateUpdate(BaseModel):
    """Profile update; the stage has its own endpoint"""
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=3)
    phone: Optional[str] = None
    resume_link: Optional[str] = None


class CandidateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: str
    job_id: str
    stage: str
    user_id: Optional[str] = None
    resume_link: str
    created_at: datetime
    updated_at: datetime


class CandidateListResponse(BaseModel):
    data: List[CandidateResponse]
    pagination: Pagination


class StageChangeRequest(BaseModel):
    stage: CandidateStage = Field(..., description="Target pipeline stage")
    notes: str = Field("", description="Why the candidate moved")


class StageTransitionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    candidate_id: str
    from_stage: str
    to_stage: str
    timestamp: datetime
    user_id: str
    notes: str


class StageChangeResponse(BaseModel):
    candidate: CandidateResponse
    transition: Optional[StageTransitionResponse] = Field(
        None, description="Null when the candidate was already in the requested stage"
    )


class NoteCreate(BaseModel):
    content: str = Field(..., min_length=1, description="Note text; @handles are extracted as mentions")


class NoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    candidate_id: str
    author: str
    content: str
    mentions: List[str]
    timestamp: datetime


class MeResponse(BaseModel):
    user_id: str
    name: str
    email: str
    role: str


class ApplicationSummary(BaseModel):
    """One entry of the caller's applied-jobs list"""
    application: CandidateResponse
    job: Optional[JobResponse] = None
    assessment_status: str = Field(..., description="none, pending or submitted")
