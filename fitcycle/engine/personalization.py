"""Onboarding rules mapping a user's work type and weight to a starting plan."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from fitcycle.schemas.fasting import FastingProtocol
from fitcycle.schemas.workout import DifficultyLevel, WorkType


class WeightCategory(str, Enum):
    LOWER = "lower"
    HIGHER = "higher"


# kg at or above which a user counts as "higher" for their work type
WEIGHT_THRESHOLDS: dict[WorkType, float] = {
    WorkType.SEDENTARY: 80.0,
    WorkType.MODERATE: 85.0,
    WorkType.ACTIVE: 90.0,
}

FASTING_PLAN_RULES: dict[WorkType, dict[WeightCategory, FastingProtocol]] = {
    WorkType.SEDENTARY: {WeightCategory.HIGHER: FastingProtocol.FOURTEEN_TEN,
                         WeightCategory.LOWER: FastingProtocol.SIXTEEN_EIGHT},
    WorkType.MODERATE: {WeightCategory.HIGHER: FastingProtocol.FOURTEEN_TEN,
                        WeightCategory.LOWER: FastingProtocol.SIXTEEN_EIGHT},
    WorkType.ACTIVE: {WeightCategory.HIGHER: FastingProtocol.TWELVE_TWELVE,
                      WeightCategory.LOWER: FastingProtocol.TWELVE_TWELVE},
}

WORKOUT_DIFFICULTY_RULES: dict[WorkType, DifficultyLevel] = {
    WorkType.SEDENTARY: DifficultyLevel.BEGINNER,
    WorkType.MODERATE: DifficultyLevel.INTERMEDIATE,
    WorkType.ACTIVE: DifficultyLevel.ADVANCED,
}


class StartingPlan(BaseModel):
    work_type: WorkType
    weight_category: WeightCategory
    protocol: FastingProtocol
    difficulty: DifficultyLevel


def weight_category(work_type: WorkType, weight_kg: float) -> WeightCategory:
    if weight_kg >= WEIGHT_THRESHOLDS[work_type]:
        return WeightCategory.HIGHER
    return WeightCategory.LOWER


def recommend_protocol(work_type: WorkType, weight_kg: float) -> FastingProtocol:
    return FASTING_PLAN_RULES[work_type][weight_category(work_type, weight_kg)]


def recommend_starting_plan(work_type: WorkType, weight_kg: float) -> StartingPlan:
    return StartingPlan(work_type=work_type, weight_category=weight_category(work_type, weight_kg),
                        protocol=recommend_protocol(work_type, weight_kg),
                        difficulty=WORKOUT_DIFFICULTY_RULES[work_type], )
