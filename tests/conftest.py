"""
Shared pytest fixtures.

Every test gets a fresh in-memory SQLite database (StaticPool so the
TestClient's worker thread sees the same connection) with foreign keys on.
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import models  # noqa: F401  (registers tables)
from api.auth import hash_api_key
from config.settings import settings
from models.user import User, UserRole
from services import AssessmentService, CandidateService, JobService
from utils.database import get_db

ADMIN_KEY = "test-admin-key"
CANDIDATE_KEY = "test-candidate-key"
OTHER_CANDIDATE_KEY = "test-other-candidate-key"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


def _make_user(session, email, name, role, raw_key):
    user = User(email=email, name=name, role=role, key_hash=hash_api_key(raw_key))
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def admin_user(session):
    return _make_user(session, "admin@example.com", "Ada Admin", UserRole.ADMIN.value, ADMIN_KEY)


@pytest.fixture
def candidate_user(session):
    return _make_user(session, "casey@example.com", "Casey Candidate", UserRole.CANDIDATE.value, CANDIDATE_KEY)


@pytest.fixture
def other_candidate_user(session):
    return _make_user(session, "robin@example.com", "Robin Other", UserRole.CANDIDATE.value, OTHER_CANDIDATE_KEY)


@pytest.fixture
def job_service(session):
    return JobService(session)


@pytest.fixture
def candidate_service(session):
    return CandidateService(session)


@pytest.fixture
def assessment_service(session):
    return AssessmentService(session)


@pytest.fixture
def job(job_service):
    return job_service.create_job(title="Backend Engineer", tags=["Remote", "Tech"])


@pytest.fixture
def client(session, monkeypatch):
    """TestClient whose requests share the test's database session."""
    from api.main import app

    monkeypatch.setattr(settings, "SIMULATE_NETWORK", False)

    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(admin_user):
    return {"X-API-Key": ADMIN_KEY}


@pytest.fixture
def candidate_headers(candidate_user):
    return {"X-API-Key": CANDIDATE_KEY}


@pytest.fixture
def other_candidate_headers(other_candidate_user):
    return {"X-API-Key": OTHER_CANDIDATE_KEY}
