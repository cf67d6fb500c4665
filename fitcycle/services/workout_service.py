"""
Workout service.

Generates daily workouts from the exercise repository.  When the request
names a user, fasting compliance is read from that user's stored fasting
history; otherwise the progression engine's default is used.
"""

import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from fitcycle.catalog.repository import ExerciseRepository
from fitcycle.core.config import settings
from fitcycle.core.exceptions import EmptyCatalogSelection
from fitcycle.engine.exercise_selection import (can_proceed_to_next, derive_difficulty, exercise_sequence,
                                                generate_daily_workout, missing_before, recommend_exercises, )
from fitcycle.engine.progression import apply_meal_adjustments, calculate_adjustments, compute_progression_factors
from fitcycle.schemas.workout import (CanProceedRequest, CanProceedResponse, DailyWorkout, DifficultyLevel,
                                      ExerciseDefinition, Goal, MealTargets, MealTargetsRequest, ProgressionAdjustments,
                                      ProgressionFactors, SelectedExercise, UserAttributes, WorkoutRequest, )
from fitcycle.services.fasting_service import FastingService

logger = logging.getLogger(__name__)

DEFAULT_FASTING_COMPLIANCE = 75.0


class WorkoutService:
    """Service for daily workout generation and progression."""

    def __init__(self, session: Session, repository: ExerciseRepository):
        self.fasting = FastingService(session)
        self.repository = repository

    def daily_workout(self, request: WorkoutRequest) -> DailyWorkout:
        factors = self._factors(request.attributes, request.completion_history, request.user_id)
        try:
            return generate_daily_workout(request.attributes, self.repository.list_exercises(), factors=factors,
                                          target_muscle_groups=request.target_muscle_groups,
                                          exercise_count=request.exercise_count or settings.DEFAULT_EXERCISE_COUNT,
                                          include_warmup=request.include_warmup,
                                          include_cooldown=request.include_cooldown, )
        except EmptyCatalogSelection as e:
            logger.error("Cannot build a workout: %s", e)
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e), )

    def sequence(self, request: WorkoutRequest) -> list[SelectedExercise]:
        return exercise_sequence(self.daily_workout(request))

    def progression(self, request: WorkoutRequest) -> ProgressionAdjustments:
        attributes = request.attributes.model_copy(update={"difficulty": derive_difficulty(request.attributes)})
        factors = self._factors(attributes, request.completion_history, request.user_id)
        return calculate_adjustments(attributes, factors)

    def meal_targets(self, request: MealTargetsRequest) -> MealTargets:
        adjustments = self.progression(request)
        calories, protein = apply_meal_adjustments(request.base_calories, request.base_protein, adjustments)
        return MealTargets(calories=max(0, calories), protein=protein,
                           calorie_adjustment=adjustments.calorie_adjustment,
                           portion_multiplier=adjustments.portion_multiplier,
                           protein_multiplier=adjustments.protein_multiplier, )

    @staticmethod
    def can_proceed(data: CanProceedRequest) -> CanProceedResponse:
        return CanProceedResponse(can_proceed=can_proceed_to_next(data.current_index, data.completed_indices),
                                  missing_indices=missing_before(data.current_index, data.completed_indices), )

    def recommendations(self, goal: Optional[Goal], difficulty: DifficultyLevel,
                        count: int = 10, ) -> list[ExerciseDefinition]:
        return recommend_exercises(self.repository.list_exercises(), goal, difficulty, count)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _factors(self, attributes: UserAttributes, completion_history: Optional[list[float]],
                 user_id: Optional[str], ) -> ProgressionFactors:
        compliance = None
        if user_id is not None:
            compliance = self.fasting.weekly_compliance(user_id)
        if compliance is None:
            compliance = DEFAULT_FASTING_COMPLIANCE
        return compute_progression_factors(attributes.day_number, completion_history=completion_history,
                                           fasting_compliance=compliance, )
