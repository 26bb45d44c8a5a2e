from pydantic import BaseModel


class MigrationResult(BaseModel):
    """Outcome of copying one user's documents between stores"""

    success: bool
    migrated: int = 0
    message: str
