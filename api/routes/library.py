"""Supplement library routes"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
import logging

from adapters.document_store import DocumentStore
from api.dependencies import get_current_user_id, get_document_store
from domain.schemas.library_schemas import (
    LibraryItemCreate,
    LibraryItemUpdate,
    SupplementLibraryItem,
)
from services.library_service import LibraryService

router = APIRouter(prefix="/library", tags=["Library"])
logger = logging.getLogger("supplement_tracker.api.library")


@router.get("", response_model=List[SupplementLibraryItem])
def get_library(
    search: Optional[str] = Query(None, description="Filter by name or category"),
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
):
    """The user's library; the default catalog is seeded on first access"""
    return LibraryService.get_library(store, user_id, search)


@router.post("", response_model=SupplementLibraryItem, status_code=status.HTTP_201_CREATED)
def add_library_item(
    payload: LibraryItemCreate,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
):
    return LibraryService.add_item(store, user_id, payload)


@router.put("/{item_id}", response_model=SupplementLibraryItem)
def update_library_item(
    item_id: str,
    payload: LibraryItemUpdate,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
):
    return LibraryService.update_item(store, user_id, item_id, payload)


@router.delete("/{item_id}")
def delete_library_item(
    item_id: str,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
):
    LibraryService.delete_item(store, user_id, item_id)
    return {"status": "ok", "removed": item_id}
