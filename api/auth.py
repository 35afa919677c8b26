import hashlib
import logging
from typing import Optional

from pydantic import BaseModel
from fastapi import HTTPException, Security, status, Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from models.user import UserRole
from repositories.user_repository import UserRepository
from utils.database import get_db

logger = logging.getLogger(__name__)

# Define API Key security scheme for OpenAPI/Swagger
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


class UserContext(BaseModel):
    """Acting user resolved from the X-API-Key header, passed explicitly to every operation."""
    user_id: str
    role: str
    name: str
    email: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def hash_api_key(raw_key: str) -> str:
    """Derive deterministic hash for API key secrets."""
    return hashlib.sha256(raw_key.encode("utf-8")).hexdigest()


def verify_api_key(
    api_key: Optional[str] = Security(api_key_header),
    db: Session = Depends(get_db),
) -> UserContext:
    """
    Dependency to verify the API key from the X-API-Key header, backed by the users table.

    Returns:
        UserContext: identity and role of the caller

    Raises:
        HTTPException: If the key is missing, unknown or belongs to an inactive user.
    """
    if not api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API key",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    repo = UserRepository(db)
    try:
        user = repo.get_by_hash(hash_api_key(api_key))
        if user and user.is_active:
            repo.touch_last_used(user)
    except SQLAlchemyError:
        logger.exception("API key lookup failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to validate API key",
        )

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="API key is inactive",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    return UserContext(
        user_id=user.id,
        role=user.role,
        name=user.name,
        email=user.email,
    )


def require_admin(user: UserContext = Depends(verify_api_key)) -> UserContext:
    """
    Restrict a route to admins.

    Usage:
        @router.post("/jobs")
        def create_job(..., admin: UserContext = Depends(require_admin)):
            ...
    """
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required",
        )
    return user
