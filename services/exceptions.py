"""
Domain errors raised by the service layer.

The API maps them to HTTP responses in api/errors.py; the Streamlit UI
shows their message inline.
"""

from typing import Optional


class NotFoundError(LookupError):
    """A referenced job, candidate, assessment or draft does not exist."""

    def __init__(self, entity: str, identifier: str):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found: {identifier}")


class AnswerValidationError(ValueError):
    """Submitted answers broke a validation rule; carries the first failing question."""

    def __init__(self, message: str, question_id: Optional[str] = None):
        self.message = message
        self.question_id = question_id
        super().__init__(message)


class AssessmentDefinitionError(ValueError):
    """An authored question set cannot be saved."""

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class ConflictError(Exception):
    """The write collides with existing state (slug taken, already applied, ...)."""


class DuplicateSubmissionError(ConflictError):
    """The candidate has already submitted this assessment."""


class TransientWriteError(Exception):
    """A write failed for a reason the caller may retry (simulated network fault)."""
