"""Local JSON-file document store.

Fallback for when MongoDB is not configured or not reachable. With no path the
store lives in memory only, which is what the tests use.
"""

import copy
import json
import logging
import os
import threading
from typing import Any, Dict, List, Optional

from adapters.document_store import DocumentStore
from app.exceptions import StorageError

logger = logging.getLogger("supplement_tracker.local_store")


class LocalDocumentStore(DocumentStore):
    """DocumentStore kept in a dict and mirrored to a JSON file after each write."""

    name = "local"

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self._lock = threading.Lock()
        self._data: Dict[str, Dict[str, Dict[str, Any]]] = {}
        if path:
            self._load()

    def _load(self) -> None:
        if not os.path.exists(self.path):
            logger.info("Local store %s does not exist yet; starting empty", self.path)
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable local store %s: %s", self.path, exc)
            return
        if isinstance(raw, dict):
            self._data = {
                name: docs for name, docs in raw.items() if isinstance(docs, dict)
            }
        logger.info(
            "Loaded local store %s (%d collections)", self.path, len(self._data)
        )

    def _flush(self) -> None:
        if not self.path:
            return
        tmp_path = f"{self.path}.tmp"
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self._data, f)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            logger.exception("Error writing local store %s", self.path)
            raise StorageError(f"Could not write local store {self.path}: {exc}")

    def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            doc = self._data.get(collection, {}).get(key)
            return copy.deepcopy(doc)

    def put(self, collection: str, key: str, document: Dict[str, Any]) -> None:
        with self._lock:
            self._data.setdefault(collection, {})[key] = copy.deepcopy(document)
            self._flush()

    def delete(self, collection: str, key: str) -> bool:
        with self._lock:
            docs = self._data.get(collection, {})
            if key not in docs:
                return False
            del docs[key]
            self._flush()
            return True

    def find(
        self, collection: str, filters: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        filters = filters or {}
        with self._lock:
            return [
                copy.deepcopy(doc)
                for doc in self._data.get(collection, {}).values()
                if all(doc.get(k) == v for k, v in filters.items())
            ]
