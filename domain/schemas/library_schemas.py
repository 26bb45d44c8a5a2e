from pydantic import BaseModel, Field
from typing import Optional


class SupplementLibraryItem(BaseModel):
    """Catalog entry used as a source for day entries"""

    id: str
    name: str
    default_dosage: str = ""
    category: str = "Other"

    model_config = {"from_attributes": True}


class LibraryItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    default_dosage: str = Field(default="", max_length=100)
    category: str = Field(default="Other", min_length=1, max_length=100)


class LibraryItemUpdate(BaseModel):
    """Partial update; omitted fields keep their current value"""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    default_dosage: Optional[str] = Field(None, max_length=100)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
