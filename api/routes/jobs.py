"""
Job board routes.

Routes do not raise HTTPException for domain failures. Service errors
(NotFoundError, ConflictError, ValueError) propagate and are turned into
responses by the handlers in api/errors.py, so the same mapping holds
for every router. Only authentication answers inline (api/auth.py).
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from api.auth import UserContext, require_admin, verify_api_key
from api.models.candidate_schemas import CandidateResponse
from api.models.common_schemas import Pagination
from api.models.job_schemas import (
    ApplyRequest,
    JobCreate,
    JobListResponse,
    JobReorderRequest,
    JobResponse,
    JobUpdate,
)
from config.settings import settings
from api.simulation import simulated_read, simulated_write
from models.job import JobStatus
from services.candidate_service import CandidateService
from services.job_service import JobService
from utils.database import get_db

router = APIRouter(
    prefix="/jobs",
    tags=["Jobs"],
    dependencies=[Depends(verify_api_key)]
)


@router.get("", response_model=JobListResponse, dependencies=[Depends(simulated_read)])
def list_jobs(
    search: Optional[str] = Query(None, description="Matches title or slug"),
    status_filter: Optional[JobStatus] = Query(None, alias="status"),
    tag: Optional[str] = Query(None),
    sort: str = Query("order", pattern="^(order|title|created)$"),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, le=200),
    user: UserContext = Depends(verify_api_key),
    db: Session = Depends(get_db),
):
    """
    List jobs for the board.

    Admins see every job; candidates only see active ones.
    """
    service = JobService(db)
    jobs, total = service.list_jobs(
        search=search,
        status=status_filter.value if status_filter else None,
        tag=tag,
        sort=sort,
        page=page,
        page_size=page_size,
        include_archived=user.is_admin,
    )
    size = page_size or settings.DEFAULT_JOB_PAGE_SIZE
    return JobListResponse(
        data=[JobResponse.model_validate(job) for job in jobs],
        pagination=Pagination.build(page=page, page_size=size, total=total),
    )


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(simulated_write)])
def create_job(
    request: JobCreate,
    admin: UserContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Create a job at the end of the board. A slug is derived from the title when not given."""
    job = JobService(db).create_job(
        title=request.title,
        description=request.description,
        tags=request.tags,
        status=request.status.value,
        slug=request.slug,
    )
    return JobResponse.model_validate(job)


@router.get("/by-slug/{slug}", response_model=JobResponse, dependencies=[Depends(simulated_read)])
def get_job_by_slug(slug: str, db: Session = Depends(get_db)):
    return JobResponse.model_validate(JobService(db).get_job_by_slug(slug))


@router.get("/{job_id}", response_model=JobResponse, dependencies=[Depends(simulated_read)])
def get_job(job_id: str, db: Session = Depends(get_db)):
    return JobResponse.model_validate(JobService(db).get_job(job_id))


@router.patch("/{job_id}", response_model=JobResponse, dependencies=[Depends(simulated_write)])
def update_job(
    job_id: str,
    request: JobUpdate,
    admin: UserContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Update title, slug, status, tags or description. A taken slug returns 409."""
    changes = request.model_dump(exclude_unset=True, mode="json")
    job = JobService(db).update_job(job_id, changes)
    return JobResponse.model_validate(job)


@router.patch("/{job_id}/reorder", response_model=List[JobResponse], dependencies=[Depends(simulated_write)])
def reorder_job(
    job_id: str,
    request: JobReorderRequest,
    admin: UserContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Move a job to a new board position; returns every job in the new order."""
    jobs = JobService(db).reorder_job(job_id, request.to_index)
    return [JobResponse.model_validate(job) for job in jobs]


@router.post("/{job_id}/apply", response_model=CandidateResponse, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(simulated_write)])
def apply_to_job(
    job_id: str,
    request: ApplyRequest,
    user: UserContext = Depends(verify_api_key),
    db: Session = Depends(get_db),
):
    """Apply to an active job as the calling user. Applying twice returns 409."""
    candidate = CandidateService(db).apply(
        job_id=job_id,
        user_id=user.user_id,
        name=request.name or user.name,
        email=request.email or user.email,
        phone=request.phone,
        resume_link=request.resume_link,
    )
    return CandidateResponse.model_validate(candidate)
