"""
Admin candidate pipeline routes.

Service errors propagate to the handlers registered in api/errors.py
(404 for unknown candidates, 400 for invalid stages or fields) instead of
being raised as HTTPException here.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from api.auth import UserContext, require_admin
from api.models.candidate_schemas import (
    CandidateCreate,
    CandidateListResponse,
    CandidateResponse,
    CandidateUpdate,
    NoteCreate,
    NoteResponse,
    StageChangeRequest,
    StageChangeResponse,
    StageTransitionResponse,
)
from api.models.common_schemas import Pagination
from api.simulation import simulated_read, simulated_write
from config.settings import settings
from models.candidate import CandidateStage
from services.candidate_service import CandidateService
from utils.database import get_db

router = APIRouter(
    prefix="/candidates",
    tags=["Candidates"],
    dependencies=[Depends(require_admin)]
)


@router.get("", response_model=CandidateListResponse, dependencies=[Depends(simulated_read)])
def list_candidates(
    search: Optional[str] = Query(None, description="Matches name or email"),
    stage: Optional[CandidateStage] = Query(None),
    job_id: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, le=200),
    db: Session = Depends(get_db),
):
    """List candidates, newest first."""
    candidates, total = CandidateService(db).list_candidates(
        search=search,
        stage=stage.value if stage else None,
        job_id=job_id,
        page=page,
        page_size=page_size,
    )
    return CandidateListResponse(
        data=[CandidateResponse.model_validate(c) for c in candidates],
        pagination=Pagination.build(
            page=page,
            page_size=page_size or settings.DEFAULT_CANDIDATE_PAGE_SIZE,
            total=total,
        ),
    )


@router.post("", response_model=CandidateResponse, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(simulated_write)])
def create_candidate(request: CandidateCreate, db: Session = Depends(get_db)):
    """Admin entry of an application. Records the initial applied transition."""
    candidate = CandidateService(db).create_candidate(**request.model_dump())
    return CandidateResponse.model_validate(candidate)


@router.get("/{candidate_id}", response_model=CandidateResponse, dependencies=[Depends(simulated_read)])
def get_candidate(candidate_id: str, db: Session = Depends(get_db)):
    return CandidateResponse.model_validate(CandidateService(db).get_candidate(candidate_id))


@router.patch("/{candidate_id}", response_model=CandidateResponse, dependencies=[Depends(simulated_write)])
def update_candidate(candidate_id: str, request: CandidateUpdate, db: Session = Depends(get_db)):
    candidate = CandidateService(db).update_candidate(candidate_id, request.model_dump(exclude_unset=True))
    return CandidateResponse.model_validate(candidate)


@router.patch("/{candidate_id}/stage", response_model=StageChangeResponse, dependencies=[Depends(simulated_write)])
def change_stage(
    candidate_id: str,
    request: StageChangeRequest,
    admin: UserContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """
    Move a candidate to another pipeline stage.

    Records a stage transition; asking for the current stage changes nothing
    and returns `transition: null`.
    """
    candidate, transition = CandidateService(db).change_stage(
        candidate_id,
        request.stage.value,
        user_id=admin.user_id,
        notes=request.notes,
    )
    return StageChangeResponse(
        candidate=CandidateResponse.model_validate(candidate),
        transition=StageTransitionResponse.model_validate(transition) if transition else None,
    )


@router.get("/{candidate_id}/timeline", response_model=List[StageTransitionResponse],
            dependencies=[Depends(simulated_read)])
def get_timeline(candidate_id: str, db: Session = Depends(get_db)):
    """Stage history, oldest first."""
    transitions = CandidateService(db).timeline(candidate_id)
    return [StageTransitionResponse.model_validate(t) for t in transitions]


@router.get("/{candidate_id}/notes", response_model=List[NoteResponse], dependencies=[Depends(simulated_read)])
def list_notes(candidate_id: str, db: Session = Depends(get_db)):
    return [NoteResponse.model_validate(n) for n in CandidateService(db).list_notes(candidate_id)]


@router.post("/{candidate_id}/notes", response_model=NoteResponse, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(simulated_write)])
def add_note(
    candidate_id: str,
    request: NoteCreate,
    admin: UserContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Add a note; `@handle` mentions are extracted from the content."""
    note = CandidateService(db).add_note(candidate_id, author=admin.name or admin.email, content=request.content)
    return NoteResponse.model_validate(note)
