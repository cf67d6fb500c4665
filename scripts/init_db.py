"""
Database initialization script.

Creates the fasting state table in the database named by DATABASE_URL.
Production deployments should prefer ``alembic upgrade head``.

Usage:
    python scripts/init_db.py
"""

import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from sqlalchemy.exc import SQLAlchemyError

from fitcycle.core.config import settings
from fitcycle.db.init_db import init_db

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("=" * 50)
    print("FitCycle Database Initialization")
    print(f"Database: {settings.DATABASE_URL}")
    print("=" * 50)

    try:
        init_db()
    except SQLAlchemyError as e:
        print(f"ERROR: Database initialization failed: {e}")
        sys.exit(1)

    print("SUCCESS: Database initialized!")
