"""
Migration script to create all database tables (non-destructive)

Run this script to create any missing tables:
    python -m app.migrations.create_all_tables

Unlike provision_schema, existing tables and rows are left alone.
"""

import logging

from app.database import engine, Base
from app.migrations.provision_schema import create_database_if_missing
# Import all models to ensure they're registered with Base
from app import models  # noqa: F401

logger = logging.getLogger(__name__)


def create_tables(bind=engine):
    """Create all database tables"""
    logger.info("Creating all database tables...")
    try:
        create_database_if_missing(bind.url)
        Base.metadata.create_all(bind=bind)
        logger.info(f"Tables ready: {', '.join(sorted(Base.metadata.tables))}")
    except Exception as e:
        logger.error(f"Error creating tables: {e}")
        raise


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    create_tables()
