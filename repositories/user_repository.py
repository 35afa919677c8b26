from datetime import datetime
from typing import Optional

from sqlmodel import Session, select

from models.user import User
from repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """Data access helpers for users and their API keys."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, User)

    def get_by_hash(self, key_hash: str) -> Optional[User]:
        """Fetch a user by the sha256 hash of their API key."""
        return self.db.exec(
            select(User).where(User.key_hash == key_hash)
        ).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.exec(
            select(User).where(User.email == email)
        ).first()

    def touch_last_used(self, user: User) -> User:
        """Update last_used_at timestamp for a user's key."""
        user.last_used_at = datetime.utcnow()
        return self.update(user)
