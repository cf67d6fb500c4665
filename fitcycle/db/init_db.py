"""
Database initialization.

Creates all tables registered on ``SQLModel.metadata``.
"""

import logging

from sqlmodel import SQLModel

from fitcycle.db.session import engine

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create every table that does not exist yet."""
    # Import all models so SQLModel.metadata has them
    import fitcycle.db.base  # noqa: F401

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Tables created")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
