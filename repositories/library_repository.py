"""
Supplement Library Repository - per-user supplement catalog
"""

from typing import List, Optional

from repositories.base import DocumentRepository
from domain.schemas.library_schemas import SupplementLibraryItem


DEFAULT_LIBRARY = [
    ("1", "Vitamin D3", "2000 IU", "Vitamins"),
    ("2", "Vitamin B12", "1000 mcg", "Vitamins"),
    ("3", "Omega-3 Fish Oil", "1000 mg", "Fatty Acids"),
    ("4", "Magnesium", "400 mg", "Minerals"),
    ("5", "Vitamin C", "1000 mg", "Vitamins"),
    ("6", "Zinc", "15 mg", "Minerals"),
    ("7", "Probiotics", "10 billion CFU", "Digestive"),
    ("8", "Multivitamin", "1 tablet", "Vitamins"),
    ("9", "Calcium", "500 mg", "Minerals"),
    ("10", "Iron", "18 mg", "Minerals"),
    ("11", "Vitamin E", "400 IU", "Vitamins"),
    ("12", "Biotin", "5000 mcg", "Vitamins"),
    ("13", "Ashwagandha", "300 mg", "Herbs"),
    ("14", "Turmeric", "500 mg", "Herbs"),
    ("15", "CoQ10", "100 mg", "Antioxidants"),
]


def default_library() -> List[SupplementLibraryItem]:
    return [
        SupplementLibraryItem(id=i, name=n, default_dosage=d, category=c)
        for i, n, d, c in DEFAULT_LIBRARY
    ]


class SupplementLibraryRepository(DocumentRepository):
    """Repository for supplement_libraries documents keyed by user_id"""

    collection = "supplement_libraries"

    def get(self, user_id: str) -> Optional[List[SupplementLibraryItem]]:
        """Stored library, or None when the user has never saved one"""
        doc = self.store.get(self.collection, user_id)
        if doc is None:
            return None
        return [SupplementLibraryItem.model_validate(i) for i in doc.get("library", [])]

    def save(self, user_id: str, library: List[SupplementLibraryItem]) -> None:
        self.store.put(
            self.collection,
            user_id,
            {"user_id": user_id, "library": [i.model_dump() for i in library]},
        )
