"""
Document store capability.

Repositories are written once against this interface; MongoDB and the local
JSON store are interchangeable implementations selected by configuration.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class DocumentStore(ABC):
    """Keyed JSON-like documents grouped into named collections.

    Writes are full replaces (last write wins). Implementations raise
    app.exceptions.StorageError when the backend cannot serve a request;
    a missing document is never an error.
    """

    name = "abstract"

    @abstractmethod
    def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        """Return the document stored under key, or None"""

    @abstractmethod
    def put(self, collection: str, key: str, document: Dict[str, Any]) -> None:
        """Replace the document stored under key"""

    @abstractmethod
    def delete(self, collection: str, key: str) -> bool:
        """Delete the document under key, returning whether it existed"""

    @abstractmethod
    def find(
        self, collection: str, filters: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """Return all documents whose fields equal every value in filters"""

    def close(self) -> None:
        """Release backend resources"""
