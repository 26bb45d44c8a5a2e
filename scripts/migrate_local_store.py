#!/usr/bin/env python3
"""
Copy tracker data from the local JSON store into MongoDB.

Users whose daily data already exists in MongoDB are skipped, so the script
can be re-run safely.

    python scripts/migrate_local_store.py --source ./data/local_store.json --all-users
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from adapters import LocalDocumentStore, MongoDocumentStore  # noqa: E402
from app.config import settings  # noqa: E402
from app.exceptions import StorageError  # noqa: E402
from repositories import DailyDataRepository  # noqa: E402
from services.migration_service import MigrationService  # noqa: E402

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("migrate_local_store")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument(
        "--source",
        default=settings.local_store_path,
        help="Local store JSON file (default: LOCAL_STORE_PATH)",
    )
    parser.add_argument("--mongo-uri", default=settings.mongo_uri)
    parser.add_argument("--mongo-db", default=settings.mongo_db_name)
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--user-id", action="append", dest="user_ids")
    group.add_argument(
        "--all-users",
        action="store_true",
        help="Migrate every user that has daily data in the source",
    )
    return parser.parse_args(argv)


def source_user_ids(source: LocalDocumentStore):
    docs = source.find(DailyDataRepository.collection)
    return sorted({d["user_id"] for d in docs if d.get("user_id")})


def main(argv=None) -> int:
    args = parse_args(argv)

    if not args.source or not Path(args.source).exists():
        logger.error(f"✗ Local store not found: {args.source}")
        return 1
    source = LocalDocumentStore(args.source)

    target = MongoDocumentStore(args.mongo_uri, args.mongo_db)
    try:
        target.connect()
    except StorageError as e:
        logger.error(f"✗ Cannot reach MongoDB at {args.mongo_uri}: {e}")
        return 1

    user_ids = args.user_ids or source_user_ids(source)
    logger.info(f"Migrating {len(user_ids)} user(s) to {args.mongo_db}")

    failures = 0
    try:
        for user_id in user_ids:
            result = MigrationService.migrate_user_data(source, target, user_id)
            if result.success:
                logger.info(f"✓ {user_id}: {result.message}")
            else:
                failures += 1
                logger.error(f"✗ {user_id}: {result.message}")
    finally:
        target.close()

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
