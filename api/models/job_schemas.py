from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from api.models.common_schemas import Pagination
from models.job import JobStatus


class JobCreate(BaseModel):
    """Schema for creating a job"""
    title: str = Field(..., min_length=1, max_length=200, description="Job title")
    slug: Optional[str] = Field(None, description="URL slug; derived from the title when omitted")
    status: JobStatus = Field(JobStatus.ACTIVE, description="active or archived")
    tags: List[str] = Field(default_factory=list, description="Free-form tags")
    description: Optional[str] = Field(None, description="Job description")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "title": "Senior Frontend Developer",
            "tags": ["React", "TypeScript", "Remote"],
            "description": "Build the candidate-facing job board",
        }
    })


class JobUpdate(BaseModel):
    """Schema for updating a job; only provided fields change"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    slug: Optional[str] = Field(None, min_length=1)
    status: Optional[JobStatus] = None
    tags: Optional[List[str]] = None
    description: Optional[str] = None


class JobReorderRequest(BaseModel):
    to_index: int = Field(..., ge=0, description="New 0-based position on the board")


class JobResponse(BaseModel):
    """Schema for job response"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    slug: str
    status: str
    tags: List[str]
    order: int
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class JobListResponse(BaseModel):
    data: List[JobResponse]
    pagination: Pagination


class ApplyRequest(BaseModel):
    """Self-service application; name and email default to the caller's profile"""
    name: Optional[str] = Field(None, description="Applicant name")
    email: Optional[str] = Field(None, description="Applicant email")
    phone: str = Field("", description="Phone number")
    resume_link: str = Field("", description="Link to a resume")
