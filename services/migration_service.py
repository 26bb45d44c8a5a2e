"""
Copies a user's documents from one DocumentStore to another, typically from
the local JSON store into MongoDB after moving off an offline install.
"""

import logging

from adapters.document_store import DocumentStore
from app.exceptions import StorageError
from domain.schemas.migration_schemas import MigrationResult
from repositories import (
    DailyDataRepository,
    SupplementLibraryRepository,
    TemplateRepository,
)

logger = logging.getLogger("supplement_tracker.migration")


class MigrationService:
    @staticmethod
    def migrate_user_data(
        source: DocumentStore, target: DocumentStore, user_id: str
    ) -> MigrationResult:
        """
        Copy every day record of a user, plus the library and template when the
        target has none yet.

        Nothing is copied when the target already holds daily data for the
        user, so re-running a migration is a no-op.
        """
        try:
            target_days = DailyDataRepository(target)
            if target_days.has_any(user_id):
                logger.info(f"Skipping migration for user {user_id}: target has data")
                return MigrationResult(
                    success=True, migrated=0, message="Data already exists in target store"
                )

            days = DailyDataRepository(source).list_for_user(user_id)
            for day in days:
                target_days.write(user_id, day.date, day.supplements)

            library = SupplementLibraryRepository(source).get(user_id)
            if library is not None and SupplementLibraryRepository(target).get(user_id) is None:
                SupplementLibraryRepository(target).save(user_id, library)

            template = TemplateRepository(source).get(user_id)
            if template is not None and TemplateRepository(target).get(user_id) is None:
                TemplateRepository(target).save(
                    user_id, template.supplements, updated_at=template.updated_at
                )
        except StorageError as exc:
            logger.error(f"Migration for user {user_id} failed: {exc}")
            return MigrationResult(success=False, migrated=0, message=str(exc))

        logger.info(f"Migrated {len(days)} day(s) for user {user_id}")
        return MigrationResult(
            success=True, migrated=len(days), message=f"Migrated {len(days)} day(s)"
        )
