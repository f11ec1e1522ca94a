#!/usr/bin/env python3
"""Database reset script

Drops every is_* table and recreates the schema. Development only.

Usage:
    python scripts/db_reset.py
"""

import sys

from classifieds.db.models import Base
from classifieds.db.mysql import engine
from classifieds.settings import settings
from classifieds.utils import get_logger

logger = get_logger(__name__)


def reset_database():
    """Drop and recreate all tables."""

    # Only allowed outside production
    if settings.environment not in ["local-dev", "test"]:
        logger.error("Database reset is only allowed in local-dev or test environment")
        logger.error(f"   Current environment: {settings.environment}")
        sys.exit(1)

    db_type = settings.database_type
    logger.info(f"Database type: {db_type}")

    if db_type == "sqlite":
        sqlite_path = settings.get_sqlite_path()
        if str(sqlite_path) != ":memory:" and sqlite_path.exists():
            engine.dispose()
            sqlite_path.unlink()
            logger.info(f"Deleted SQLite database: {sqlite_path}")
        elif str(sqlite_path) == ":memory:":
            logger.info("Using in-memory database (no file to delete)")
    else:
        logger.info("Dropping all MySQL tables...")
        Base.metadata.drop_all(bind=engine)
        logger.info("All MySQL tables dropped")

    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database reset completed")


if __name__ == "__main__":
    reset_database()
