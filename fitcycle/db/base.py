"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from fitcycle.models.fasting_state import FastingStateRecord  # noqa: F401
