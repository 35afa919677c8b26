"""
Job repository.

Listing supports the filters of the jobs board: free-text search over title
and slug, status, a single tag, and three sort orders.
"""

from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlmodel import Session, select

from models.job import Job
from repositories.base_repository import BaseRepository

SORT_COLUMNS = {
    "order": (Job.order.asc(), Job.created_at.asc()),
    "title": (Job.title.asc(), Job.order.asc()),
    "created": (Job.created_at.desc(), Job.order.asc()),
}


class JobRepository(BaseRepository[Job]):
    """Repository for job postings."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, Job)

    def get_by_slug(self, slug: str) -> Optional[Job]:
        return self.db.exec(select(Job).where(Job.slug == slug)).first()

    def slug_exists(self, slug: str, exclude_id: Optional[str] = None) -> bool:
        statement = select(Job.id).where(Job.slug == slug)
        if exclude_id:
            statement = statement.where(Job.id != exclude_id)
        return self.db.exec(statement).first() is not None

    def max_order(self) -> Optional[int]:
        return self.db.exec(select(func.max(Job.order))).one()

    def list_ordered(self) -> List[Job]:
        """All jobs by display position."""
        statement = select(Job).order_by(*SORT_COLUMNS["order"])
        return list(self.db.exec(statement).all())

    def search(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        tag: Optional[str] = None,
        sort: str = "order",
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Job], int]:
        """
        Filter, sort and paginate jobs.

        Args:
            search: Case-insensitive substring of title or slug
            status: "active" / "archived", or None for both
            tag: Only jobs carrying this tag
            sort: One of "order", "title", "created"
            offset: Number of records to skip
            limit: Page size

        Returns:
            Tuple of (jobs on the page, total matching jobs)
        """
        statement = select(Job)
        if search:
            pattern = f"%{search.lower()}%"
            statement = statement.where(
                or_(func.lower(Job.title).like(pattern), func.lower(Job.slug).like(pattern))
            )
        if status:
            statement = statement.where(Job.status == status)
        statement = statement.order_by(*SORT_COLUMNS.get(sort, SORT_COLUMNS["order"]))

        if tag:
            # tags is a JSON list; matched in Python
            jobs = [job for job in self.db.exec(statement).all() if tag in (job.tags or [])]
            return jobs[offset:offset + limit], len(jobs)

        total = self.db.exec(select(func.count()).select_from(statement.subquery())).one()
        jobs = list(self.db.exec(statement.offset(offset).limit(limit)).all())
        return jobs, total
