from typing import List, Optional
import logging
import uuid

from adapters.document_store import DocumentStore
from app.exceptions import NotFoundError
from domain.schemas.library_schemas import (
    LibraryItemCreate,
    LibraryItemUpdate,
    SupplementLibraryItem,
)
from repositories import SupplementLibraryRepository
from repositories.library_repository import default_library

logger = logging.getLogger("supplement_tracker.library")


class LibraryService:
    @staticmethod
    def get_library(
        store: DocumentStore, user_id: str, search: Optional[str] = None
    ) -> List[SupplementLibraryItem]:
        """
        Get the user's supplement library, seeding the default catalog on first use.

        Args:
            store: Document store
            user_id: Library owner
            search: Optional case-insensitive filter on name or category

        Returns:
            List[SupplementLibraryItem]
        """
        repo = SupplementLibraryRepository(store)
        library = repo.get(user_id)
        if library is None:
            library = default_library()
            repo.save(user_id, library)
            logger.info(f"Seeded default supplement library for user {user_id}")

        if search:
            term = search.strip().lower()
            library = [
                item
                for item in library
                if term in item.name.lower() or term in item.category.lower()
            ]
        return library

    @staticmethod
    def get_item(store: DocumentStore, user_id: str, item_id: str) -> SupplementLibraryItem:
        for item in LibraryService.get_library(store, user_id):
            if item.id == item_id:
                return item
        raise NotFoundError(f"Library item {item_id} not found")

    @staticmethod
    def add_item(
        store: DocumentStore, user_id: str, payload: LibraryItemCreate
    ) -> SupplementLibraryItem:
        library = LibraryService.get_library(store, user_id)
        item = SupplementLibraryItem(
            id=uuid.uuid4().hex,
            name=payload.name.strip(),
            default_dosage=payload.default_dosage.strip(),
            category=payload.category.strip(),
        )
        SupplementLibraryRepository(store).save(user_id, library + [item])
        logger.info(f"Added '{item.name}' to library of user {user_id}")
        return item

    @staticmethod
    def update_item(
        store: DocumentStore, user_id: str, item_id: str, payload: LibraryItemUpdate
    ) -> SupplementLibraryItem:
        """
        Update fields of one library item.

        Raises:
            NotFoundError: If the item is not in the user's library
        """
        library = LibraryService.get_library(store, user_id)
        updates = {k: v.strip() for k, v in payload.model_dump().items() if v is not None}

        for index, item in enumerate(library):
            if item.id == item_id:
                updated = item.model_copy(update=updates)
                library[index] = updated
                SupplementLibraryRepository(store).save(user_id, library)
                return updated
        raise NotFoundError(f"Library item {item_id} not found")

    @staticmethod
    def delete_item(store: DocumentStore, user_id: str, item_id: str) -> None:
        library = LibraryService.get_library(store, user_id)
        remaining = [item for item in library if item.id != item_id]
        if len(remaining) == len(library):
            raise NotFoundError(f"Library item {item_id} not found")
        SupplementLibraryRepository(store).save(user_id, remaining)
        logger.info(f"Removed library item {item_id} for user {user_id}")
