"""
Base repository with generic CRUD operations.

This module provides a generic BaseRepository class that implements
common database operations (Create, Read, Update, Delete) for any SQLAlchemy model.
All domain-specific repositories should extend this base class.
"""

from typing import Generic, TypeVar, Type, List, Optional, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import desc, asc

from models.base import Base
from core.exceptions import NotFoundException, DatabaseException


# Generic type bound to SQLAlchemy Base
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository with CRUD operations.

    Write methods commit immediately and roll back on failure. An
    IntegrityError is re-raised unchanged (after rollback) so subclasses can
    translate constraint violations into domain exceptions; every other
    database error becomes a DatabaseException.

    Type Parameters:
        ModelType: The SQLAlchemy model type this repository manages

    Example:
        class AppConfigRepository(BaseRepository[AppConfig]):
            def __init__(self, db: Session):
                super().__init__(AppConfig, db)
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize the repository.

        Args:
            model: The SQLAlchemy model class
            db: SQLAlchemy database session
        """
        self.model = model
        self.db = db

    def get(self, id: int) -> Optional[ModelType]:
        """
        Get a single record by ID.

        Args:
            id: Primary key value

        Returns:
            Model instance or None if not found
        """
        try:
            return self.db.query(self.model).filter(self.model.id == id).first()
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to get {self.model.__name__} with id {id}") from e

    def get_or_fail(self, id: int) -> ModelType:
        """
        Get a single record by ID or raise exception.

        Raises:
            NotFoundException: If record not found
        """
        obj = self.get(id)
        if obj is None:
            raise NotFoundException(self.model.__name__, id)
        return obj

    def get_all(
        self,
        order_by: Optional[str] = None,
        order_desc: bool = True
    ) -> List[ModelType]:
        """
        Get all records, optionally sorted by a column.

        Args:
            order_by: Field name to order by (defaults to primary key ascending)
            order_desc: Whether to order descending (default: True)

        Returns:
            List of model instances
        """
        try:
            query = self.db.query(self.model)

            if order_by and hasattr(self.model, order_by):
                order_column = getattr(self.model, order_by)
                query = query.order_by(desc(order_column) if order_desc else asc(order_column))
            else:
                query = query.order_by(asc(self.model.id))

            return query.all()
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to get all {self.model.__name__}") from e

    def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """
        Count records, optionally with equality filters.

        Args:
            filters: Optional dictionary of field names and values

        Returns:
            Count of matching records
        """
        try:
            query = self.db.query(self.model)

            if filters:
                for key, value in filters.items():
                    if hasattr(self.model, key):
                        query = query.filter(getattr(self.model, key) == value)

            return query.count()
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to count {self.model.__name__}") from e

    def create(self, obj: ModelType) -> ModelType:
        """
        Create a new record.

        Args:
            obj: Model instance to create

        Returns:
            Created model instance with ID populated
        """
        try:
            self.db.add(obj)
            self.db.commit()
            self.db.refresh(obj)
            return obj
        except IntegrityError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseException(f"Failed to create {self.model.__name__}") from e

    def update(self, obj: ModelType) -> ModelType:
        """
        Persist changes made to an attached instance.

        Args:
            obj: Model instance with updated values

        Returns:
            Updated model instance
        """
        try:
            self.db.commit()
            self.db.refresh(obj)
            return obj
        except IntegrityError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseException(f"Failed to update {self.model.__name__}") from e

    def delete(self, obj: ModelType) -> bool:
        """
        Delete a record.

        Args:
            obj: Model instance to delete

        Returns:
            True if successful
        """
        try:
            self.db.delete(obj)
            self.db.commit()
            return True
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseException(f"Failed to delete {self.model.__name__}") from e

    def delete_by_id(self, id: int) -> bool:
        """
        Delete a record by ID.

        Returns:
            True if deleted, False if not found
        """
        obj = self.get(id)
        if obj is None:
            return False
        return self.delete(obj)

    def delete_all(self) -> int:
        """
        Delete every record of this model.

        Returns:
            Number of deleted rows
        """
        try:
            deleted = self.db.query(self.model).delete()
            self.db.commit()
            return deleted
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseException(f"Failed to delete all {self.model.__name__}") from e

    def exists(self, id: int) -> bool:
        """
        Check if a record exists.

        Args:
            id: Primary key value

        Returns:
            True if exists, False otherwise
        """
        try:
            return self.db.query(self.model).filter(self.model.id == id).count() > 0
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to check existence of {self.model.__name__}") from e

    def bulk_create(self, objects: List[ModelType]) -> List[ModelType]:
        """
        Create multiple records in one transaction.

        Args:
            objects: List of model instances to create

        Returns:
            List of created instances
        """
        try:
            self.db.add_all(objects)
            self.db.commit()
            return objects
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseException(f"Failed to bulk create {self.model.__name__}") from e
