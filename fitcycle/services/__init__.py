"""Business logic services."""

from fitcycle.services.exercise_service import ExerciseService
from fitcycle.services.fasting_service import FastingService
from fitcycle.services.workout_service import WorkoutService

__all__ = [
    "ExerciseService",
    "FastingService",
    "WorkoutService",
]
