"""
Services module - Business Logic Layer.

Contains application services that orchestrate business logic,
sitting between the API layer (routes) and the data layer (repositories).

Services handle:
- Business rule validation
- Orchestrating multiple repository operations
- Transaction management

Usage:
    from services import AssessmentService

    service = AssessmentService(db_session)
    response = service.submit(job_id, user_id, answers)
"""

from services.job_service import JobService
from services.candidate_service import CandidateService
from services.assessment_service import AssessmentService

__all__ = [
    "JobService",
    "CandidateService",
    "AssessmentService",
]
