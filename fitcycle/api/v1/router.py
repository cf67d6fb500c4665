"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from fitcycle.api.v1.endpoints import exercises, fasting, workouts

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    fasting.router, prefix="/fasting", tags=["Fasting"]
)
api_router.include_router(
    workouts.router, prefix="/workouts", tags=["Workouts"]
)
api_router.include_router(
    exercises.router, prefix="/exercises", tags=["Exercise catalog"]
)
