"""
Adapters package - External service connections.
Document store implementations for MongoDB and the local JSON fallback.
"""

import logging

from adapters.document_store import DocumentStore
from adapters.local_adapter import LocalDocumentStore
from adapters.mongo_adapter import MongoDocumentStore
from app.config import Settings, StorageBackend
from app.exceptions import StorageError

logger = logging.getLogger("supplement_tracker.adapters")


def create_document_store(config: Settings) -> DocumentStore:
    """
    Build the document store selected by configuration.

    MongoDB is connected eagerly. When it cannot be reached and
    storage_fallback_to_local is enabled, the local store is returned instead.

    Raises:
        StorageError: If MongoDB is unreachable and fallback is disabled
    """
    if config.storage_backend == StorageBackend.MONGO:
        store = MongoDocumentStore(config.mongo_uri, config.mongo_db_name)
        try:
            store.connect()
            return store
        except StorageError as exc:
            if not config.storage_fallback_to_local:
                raise
            logger.warning(
                "MongoDB unavailable; falling back to local store at %s: %s",
                config.local_store_path,
                exc,
            )

    return LocalDocumentStore(config.local_store_path or None)


__all__ = [
    "DocumentStore",
    "LocalDocumentStore",
    "MongoDocumentStore",
    "create_document_store",
]
