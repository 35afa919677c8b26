"""Routes about the calling user. Errors are mapped by api/errors.py."""

from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from api.auth import UserContext, verify_api_key
from api.models.candidate_schemas import ApplicationSummary, CandidateResponse, MeResponse
from api.models.job_schemas import JobResponse
from services.candidate_service import CandidateService
from utils.database import get_db

router = APIRouter(
    prefix="/me",
    tags=["Me"],
    dependencies=[Depends(verify_api_key)]
)


@router.get("", response_model=MeResponse)
def get_me(user: UserContext = Depends(verify_api_key)):
    """The identity behind the X-API-Key header."""
    return MeResponse(user_id=user.user_id, name=user.name, email=user.email, role=user.role)


@router.get("/applications", response_model=List[ApplicationSummary])
def get_my_applications(
    user: UserContext = Depends(verify_api_key),
    db: Session = Depends(get_db),
):
    """Jobs the caller applied to, with the status of each job's assessment."""
    entries = CandidateService(db).applications_for_user(user.user_id)
    return [
        ApplicationSummary(
            application=CandidateResponse.model_validate(entry["application"]),
            job=JobResponse.model_validate(entry["job"]) if entry["job"] else None,
            assessment_status=entry["assessment_status"],
        )
        for entry in entries
    ]
