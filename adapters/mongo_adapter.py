"""MongoDB adapter for daily data, templates and supplement libraries.
"""

from typing import Optional, Dict, List, Any
import logging
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from adapters.document_store import DocumentStore
from app.exceptions import StorageError

logger = logging.getLogger("supplement_tracker.mongo")


def _strip_id(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if doc is None:
        return None
    doc = dict(doc)
    doc.pop("_id", None)
    return doc


class MongoDocumentStore(DocumentStore):
    """DocumentStore backed by one MongoDB database; document keys become _id."""

    name = "mongo"

    def __init__(self, uri: str, db_name: str = "supplement_tracker", client=None):
        self.uri = uri
        self.db_name = db_name
        self._client = client
        self._db = client[db_name] if client is not None else None

    # ------------------ Connection ------------------
    def connect(self, timeout_ms: int = 5000) -> None:
        """Open the client and ping the server.

        Raises:
            StorageError: If the server cannot be reached
        """
        try:
            self._client = MongoClient(self.uri, serverSelectionTimeoutMS=timeout_ms)
            self._db = self._client[self.db_name]
            self._client.admin.command("ping")
            logger.info(
                "Connected to MongoDB %s (database: %s)", self.uri, self.db_name
            )
        except PyMongoError as exc:
            self.close()
            raise StorageError(f"Could not connect to MongoDB at {self.uri}: {exc}")

    def close(self) -> None:
        """Close MongoDB connection."""
        try:
            if self._client is not None:
                self._client.close()
                logger.info("MongoDB client closed")
        except Exception:
            logger.exception("Error closing MongoDB client")
        finally:
            self._client = None
            self._db = None

    def _collection(self, collection: str):
        if self._db is None:
            raise StorageError("MongoDB client is not connected")
        return self._db[collection]

    # ------------------ Documents ------------------
    def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        try:
            doc = self._collection(collection).find_one({"_id": key})
        except PyMongoError as exc:
            logger.exception(f"Error fetching {collection}/{key}")
            raise StorageError(f"Read failed for {collection}/{key}: {exc}")
        return _strip_id(doc)

    def put(self, collection: str, key: str, document: Dict[str, Any]) -> None:
        try:
            self._collection(collection).replace_one(
                {"_id": key}, {**document, "_id": key}, upsert=True
            )
            logger.debug(f"Stored {collection}/{key}")
        except PyMongoError as exc:
            logger.exception(f"Error writing {collection}/{key}")
            raise StorageError(f"Write failed for {collection}/{key}: {exc}")

    def delete(self, collection: str, key: str) -> bool:
        try:
            result = self._collection(collection).delete_one({"_id": key})
        except PyMongoError as exc:
            logger.exception(f"Error deleting {collection}/{key}")
            raise StorageError(f"Delete failed for {collection}/{key}: {exc}")
        return result.deleted_count > 0

    def find(
        self, collection: str, filters: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        try:
            docs = list(self._collection(collection).find(filters or {}))
        except PyMongoError as exc:
            logger.exception(f"Error querying {collection}")
            raise StorageError(f"Query failed for {collection}: {exc}")
        logger.debug(f"Found {len(docs)} documents in {collection}")
        return [_strip_id(d) for d in docs]
