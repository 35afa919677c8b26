import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.routes.assessments import router as assessments_router
from api.routes.candidates import router as candidates_router
from api.routes.jobs import router as jobs_router
from api.routes.me import router as me_router
from config.settings import settings
from utils.logging_config import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

DESCRIPTION = """
Hiring pipeline API: jobs, candidates moving through pipeline stages, and one assessment per job.

## Authentication

All endpoints (except `/`, `/ping` and `/health`) require an API key via the `X-API-Key` header.
Each key belongs to a user whose role is `admin` or `candidate`.

Use the **Authorize** button above to set your API key for testing.

## Quick Start

1. **Post a job** (admin) → `POST /jobs`
2. **Author its assessment** (admin) → `PUT /assessments/{job_id}`
3. **Apply** (candidate) → `POST /jobs/{job_id}/apply`
4. **Attempt** → `GET /assessments/{job_id}/attempt`, autosave with `PUT /assessments/{job_id}/draft`
5. **Submit** → `POST /assessments/{job_id}/submit`

## Question Types

| Type | Validation |
|------|------------|
| `single-choice`, `multi-choice`, `file` | required only |
| `short-text`, `long-text` | required, `max_length` |
| `numeric` | required, finite number, inclusive `min` / `max` |

A question with a `conditional` is only shown (and validated) when the answer to the
question it depends on strictly equals the conditional value.
"""

tags_metadata = [
    {
        "name": "Health",
        "description": "Health check endpoints. No authentication required.",
    },
    {
        "name": "Jobs",
        "description": "Job board: filter, sort, paginate, reorder. Candidates apply here.",
    },
    {
        "name": "Candidates",
        "description": "Admin view of applications: profile, stage transitions, timeline, notes.",
    },
    {
        "name": "Assessments",
        "description": "Author a job's assessment, preview it, and attempt / submit it as a candidate.",
    },
    {
        "name": "Me",
        "description": "The calling user and their applications.",
    },
]

app = FastAPI(
    title="TalentFlow API",
    description=DESCRIPTION,
    version="1.0.0",
    openapi_tags=tags_metadata,
)

# Configure CORS
ALLOWED_ORIGINS = settings.ALLOWED_ORIGINS.split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/", tags=["Root"])
def root():
    """Root endpoint with API information and documentation links"""
    return {
        "message": "Welcome to TalentFlow API",
        "version": "1.0.0",
        "documentation": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "authentication": {
            "type": "API Key",
            "header": "X-API-Key",
            "note": "Required for all endpoints except /, /ping and /health"
        },
        "endpoints": {
            "health": "/health",
            "ping": "/ping",
            "jobs": "/jobs",
            "candidates": "/candidates",
            "assessments": "/assessments",
            "me": "/me"
        }
    }


# Health check endpoints (public - no authentication required)
@app.get("/ping", tags=["Health"])
def ping():
    """Simple ping endpoint to check if API is responding. No authentication required."""
    return {"message": "pong"}


@app.get("/health", tags=["Health"])
def health():
    """Health check endpoint with basic status information. No authentication required."""
    return {
        "status": "healthy",
        "service": "TalentFlow API",
        "version": "1.0.0",
        "simulate_network": settings.SIMULATE_NETWORK,
    }


# Register routers
app.include_router(jobs_router)
app.include_router(candidates_router)
app.include_router(assessments_router)
app.include_router(me_router)

logger.info(f"TalentFlow API ready (simulate_network={settings.SIMULATE_NETWORK})")
