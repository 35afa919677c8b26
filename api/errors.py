"""
Exception handlers mapping service-layer errors to HTTP responses.

Routes let domain errors propagate; the handlers registered here turn
them into JSON bodies of the form {"detail": ...}.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from services.exceptions import (
    AnswerValidationError,
    AssessmentDefinitionError,
    ConflictError,
    NotFoundError,
    TransientWriteError,
)

logger = logging.getLogger(__name__)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def answer_validation_handler(request: Request, exc: AnswerValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.message, "question_id": exc.question_id},
    )


async def assessment_definition_handler(request: Request, exc: AssessmentDefinitionError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "problems": exc.problems},
    )


async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


async def transient_write_handler(request: Request, exc: TransientWriteError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} failed transiently: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc) or "Temporary failure, please retry"},
    )


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers; the most specific exception class wins."""
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(AnswerValidationError, answer_validation_handler)
    app.add_exception_handler(AssessmentDefinitionError, assessment_definition_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(TransientWriteError, transient_write_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
