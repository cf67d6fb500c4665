"""
Shared API dependencies.

Reusable FastAPI dependencies for the exercise catalog and services.
"""

from fastapi import Depends
from sqlmodel import Session

from fitcycle.catalog.repository import InMemoryExerciseRepository
from fitcycle.db.session import get_db
from fitcycle.services.exercise_service import ExerciseService
from fitcycle.services.fasting_service import FastingService
from fitcycle.services.workout_service import WorkoutService

# Process-wide catalog: built-ins plus runtime customisations
_exercise_repository = InMemoryExerciseRepository()


def get_exercise_repository() -> InMemoryExerciseRepository:
    return _exercise_repository


def get_fasting_service(db: Session = Depends(get_db)) -> FastingService:
    return FastingService(db)


def get_workout_service(db: Session = Depends(get_db),
                        repository: InMemoryExerciseRepository = Depends(get_exercise_repository), ) -> WorkoutService:
    return WorkoutService(db, repository)


def get_exercise_service(
        repository: InMemoryExerciseRepository = Depends(get_exercise_repository), ) -> ExerciseService:
    return ExerciseService(repository)
