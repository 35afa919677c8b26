"""
Base repository with common CRUD operations.

Provides a foundation for all entity repositories. Single-entity writes
(create/update/delete) commit immediately; multi-step service operations
stage their rows with `add`/`remove` and finish with one `commit()` so the
whole unit succeeds or rolls back together.
"""

from typing import TypeVar, Generic, Optional, List, Type, Any

from sqlalchemy import func
from sqlmodel import Session, select, SQLModel

T = TypeVar("T", bound=SQLModel)


class BaseRepository(Generic[T]):
    """
    Generic base repository with common CRUD operations.

    Type Parameters:
        T: SQLModel entity type
    """

    def __init__(self, db_session: Session, model_class: Type[T]):
        """
        Initialize repository.

        Args:
            db_session: SQLModel database session
            model_class: The SQLModel class this repository manages
        """
        self.db = db_session
        self.model_class = model_class

    def get_by_id(self, id: Any) -> Optional[T]:
        """
        Get entity by ID.

        Args:
            id: Primary key (UUID string)

        Returns:
            Entity if found, None otherwise
        """
        return self.db.get(self.model_class, id)

    def get_all(self, limit: int = 100, offset: int = 0) -> List[T]:
        """
        Get all entities with pagination.

        Args:
            limit: Maximum number of results
            offset: Number of records to skip

        Returns:
            List of entities
        """
        statement = select(self.model_class).offset(offset).limit(limit)
        return list(self.db.exec(statement).all())

    def count(self) -> int:
        statement = select(func.count()).select_from(self.model_class)
        return self.db.exec(statement).one()

    def create(self, entity: T) -> T:
        """
        Create a new entity and commit.

        Args:
            entity: Entity to create

        Returns:
            Created entity, refreshed from the database
        """
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: T) -> T:
        """
        Persist changes to an existing entity and commit.

        Args:
            entity: Entity with updated values

        Returns:
            Updated entity
        """
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity: T) -> bool:
        """
        Delete an entity and commit.

        Args:
            entity: Entity to delete

        Returns:
            True if deleted
        """
        self.db.delete(entity)
        self.db.commit()
        return True

    def add(self, entity: T) -> T:
        """Stage an entity in the current transaction without committing."""
        self.db.add(entity)
        self.db.flush()
        return entity

    def remove(self, entity: T) -> None:
        """Stage a delete in the current transaction without committing."""
        self.db.delete(entity)
        self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
