"""
Job Service - Business Logic Layer.

Owns the rules around job postings:
- slug derivation and uniqueness
- status changes (archive / unarchive)
- display ordering (drag-reorder renumbers every job)
- board listing with filters and pagination
"""

import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlmodel import Session

from config.settings import settings
from models.job import Job, JobStatus
from repositories import JobRepository
from repositories.job_repository import SORT_COLUMNS
from services.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "slug", "status", "tags", "description")


def slugify(text: str) -> str:
    """Lowercase, collapse runs of non-alphanumerics to '-' and trim the ends."""
    slug = re.sub(r"[^a-z0-9]+", "-", (text or "").lower()).strip("-")
    return slug or "job"


def clean_tags(tags: Optional[List[str]]) -> List[str]:
    """Strip blanks and duplicates, keeping first-seen order."""
    seen = []
    for tag in tags or []:
        tag = str(tag).strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def _check_status(status: str) -> str:
    allowed = [s.value for s in JobStatus]
    if status not in allowed:
        raise ValueError(f"Invalid status '{status}'. Must be one of: {', '.join(allowed)}")
    return status


class JobService:
    """Application service for job postings."""

    def __init__(self, db_session: Session):
        self.db = db_session
        self.jobs = JobRepository(db_session)

    def list_jobs(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        tag: Optional[str] = None,
        sort: str = "order",
        page: int = 1,
        page_size: Optional[int] = None,
        include_archived: bool = True,
    ) -> Tuple[List[Job], int]:
        """
        List jobs for the board.

        Args:
            search: Substring of title or slug
            status: Optional status filter
            tag: Optional tag filter
            sort: "order", "title" or "created"
            page: 1-based page number
            page_size: Defaults to DEFAULT_JOB_PAGE_SIZE, capped at MAX_PAGE_SIZE
            include_archived: False restricts the listing to active jobs (candidate view)

        Returns:
            Tuple of (jobs, total)
        """
        if sort not in SORT_COLUMNS:
            raise ValueError(f"Invalid sort '{sort}'. Must be one of: {', '.join(SORT_COLUMNS)}")
        if status:
            _check_status(status)
        if not include_archived:
            if status == JobStatus.ARCHIVED.value:
                return [], 0
            status = JobStatus.ACTIVE.value

        page = max(page, 1)
        page_size = min(page_size or settings.DEFAULT_JOB_PAGE_SIZE, settings.MAX_PAGE_SIZE)
        return self.jobs.search(
            search=search.strip() if search else None,
            status=status,
            tag=tag,
            sort=sort,
            offset=(page - 1) * page_size,
            limit=page_size,
        )

    def get_job(self, job_id: str) -> Job:
        job = self.jobs.get_by_id(job_id)
        if not job:
            raise NotFoundError("Job", job_id)
        return job

    def get_job_by_slug(self, slug: str) -> Job:
        job = self.jobs.get_by_slug(slug)
        if not job:
            raise NotFoundError("Job", slug)
        return job

    def _unique_slug(self, base: str, exclude_id: Optional[str] = None) -> str:
        slug = base
        suffix = 2
        while self.jobs.slug_exists(slug, exclude_id=exclude_id):
            slug = f"{base}-{suffix}"
            suffix += 1
        return slug

    def create_job(
        self,
        title: str,
        description: Optional[str] = None,
        tags: Optional[List[str]] = None,
        status: str = JobStatus.ACTIVE.value,
        slug: Optional[str] = None,
    ) -> Job:
        """
        Create a job at the end of the board.

        The slug is derived from the title unless given; a derived slug that
        is already taken gets a numeric suffix, an explicit one raises
        ConflictError.
        """
        title = (title or "").strip()
        if not title:
            raise ValueError("Job title is required")
        _check_status(status)

        if slug:
            slug = slugify(slug)
            if self.jobs.slug_exists(slug):
                raise ConflictError(f"Slug already in use: {slug}")
        else:
            slug = self._unique_slug(slugify(title))

        max_order = self.jobs.max_order()
        job = Job(
            title=title,
            slug=slug,
            status=status,
            tags=clean_tags(tags),
            description=description,
            order=0 if max_order is None else max_order + 1,
        )
        job = self.jobs.create(job)
        logger.info(f"Created job {job.id} ({job.slug}) at position {job.order}")
        return job

    def update_job(self, job_id: str, changes: Dict[str, Any]) -> Job:
        job = self.get_job(job_id)
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        if "title" in changes:
            title = (changes["title"] or "").strip()
            if not title:
                raise ValueError("Job title is required")
            job.title = title
        if changes.get("slug") is not None:
            slug = slugify(changes["slug"])
            if self.jobs.slug_exists(slug, exclude_id=job.id):
                logger.warning(f"Rejected slug change on job {job.id}: '{slug}' is taken")
                raise ConflictError(f"Slug already in use: {slug}")
            job.slug = slug
        if changes.get("status") is not None:
            job.status = _check_status(changes["status"])
        if "tags" in changes:
            job.tags = clean_tags(changes["tags"])
        if "description" in changes:
            job.description = changes["description"]

        job.updated_at = datetime.utcnow()
        job = self.jobs.update(job)
        logger.info(f"Updated job {job.id}: {', '.join(sorted(changes)) or 'no fields'}")
        return job

    def set_status(self, job_id: str, status: str) -> Job:
        """Archive or unarchive a job."""
        return self.update_job(job_id, {"status": status})

    def reorder_job(self, job_id: str, to_index: int) -> List[Job]:
        """
        Move a job to a board position and renumber all jobs 0..n-1.

        Returns:
            Every job in its new order
        """
        job = self.get_job(job_id)
        ordered = self.jobs.list_ordered()
        if to_index < 0 or to_index >= len(ordered):
            raise ValueError(f"to_index must be between 0 and {len(ordered) - 1}")

        ordered = [j for j in ordered if j.id != job.id]
        ordered.insert(to_index, job)
        now = datetime.utcnow()
        try:
            for position, item in enumerate(ordered):
                if item.order != position:
                    item.order = position
                    item.updated_at = now
                    self.jobs.add(item)
            self.jobs.commit()
        except Exception:
            self.jobs.rollback()
            raise

        logger.info(f"Moved job {job.id} to position {to_index}")
        return ordered
