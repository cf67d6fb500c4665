"""
Daily workout generation and progression endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from fitcycle.api.dependencies import get_workout_service
from fitcycle.schemas.workout import (CanProceedRequest, CanProceedResponse, DailyWorkout, DifficultyLevel,
                                      ExerciseDefinition, Goal, MealTargets, MealTargetsRequest, ProgressionAdjustments,
                                      SelectedExercise, WorkoutRequest, )
from fitcycle.services.workout_service import WorkoutService

router = APIRouter()


@router.post(
    "/daily",
    summary="Generate the workout for the user's programme day.",
    response_model=DailyWorkout,
)
def generate_daily(data: WorkoutRequest, service: WorkoutService = Depends(get_workout_service)):
    return service.daily_workout(data)


@router.post(
    "/sequence",
    summary="The day's exercises as one ordered list (no skipping ahead).",
    response_model=list[SelectedExercise],
)
def get_sequence(data: WorkoutRequest, service: WorkoutService = Depends(get_workout_service)):
    return service.sequence(data)


@router.post(
    "/progression",
    summary="Progression adjustments for the user's programme day.",
    response_model=ProgressionAdjustments,
)
def get_progression(data: WorkoutRequest, service: WorkoutService = Depends(get_workout_service)):
    return service.progression(data)


@router.post(
    "/meal-targets",
    summary="Daily calorie and protein targets after the progression nutrition adjustments.",
    response_model=MealTargets,
)
def get_meal_targets(data: MealTargetsRequest, service: WorkoutService = Depends(get_workout_service)):
    return service.meal_targets(data)


@router.post(
    "/can-proceed",
    summary="Whether every exercise before the current one is completed.",
    response_model=CanProceedResponse,
)
def can_proceed(data: CanProceedRequest):
    return WorkoutService.can_proceed(data)


@router.get(
    "/recommendations",
    summary="Goal-based exercises at a difficulty, highest calorie burn first.",
    response_model=list[ExerciseDefinition],
)
def get_recommendations(
    difficulty: DifficultyLevel,
    goal: Optional[Goal] = None,
    count: int = Query(10, ge=1, le=50),
    service: WorkoutService = Depends(get_workout_service),
):
    return service.recommendations(goal, difficulty, count)
