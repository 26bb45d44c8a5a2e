"""
Base repository interfaces for the data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Generic, TypeVar, Optional, List, Type
from sqlalchemy.orm import Session
from abc import ABC

from adapters.document_store import DocumentStore

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base SQL repository providing common CRUD operations.
    Account repositories inherit from this class.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id) -> Optional[ModelType]:
        """
        Get entity by primary key.

        Subclasses override this with their specific key column.
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement get_by_id() with specific ID field"
        )

    def get_all(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        """Get all entities with pagination"""
        return self.db.query(self.model).offset(skip).limit(limit).all()

    def create(self, entity: ModelType) -> ModelType:
        """Create new entity"""
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity_id) -> bool:
        """Delete entity by ID"""
        entity = self.get_by_id(entity_id)
        if entity:
            self.db.delete(entity)
            self.db.commit()
            return True
        return False


class DocumentRepository(ABC):
    """
    Base repository over one DocumentStore collection.
    Per-user documents (days, templates, libraries) inherit from this class.
    """

    collection: str = ""

    def __init__(self, store: DocumentStore):
        self.store = store
