"""
Workout schemas: catalog entries, user attributes, progression output,
and the generated daily workout.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fitcycle.schemas.fasting import FastingProtocol


# ======================================================================
# Enumerations
# ======================================================================


class DifficultyLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def next_tier(self) -> Optional[DifficultyLevel]:
        """The tier above this one, or ``None`` at the top."""
        order = list(DifficultyLevel)
        index = order.index(self)
        return order[index + 1] if index + 1 < len(order) else None


class ExerciseType(str, Enum):
    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
    HIIT = "hiit"


class MuscleGroup(str, Enum):
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    LEGS = "legs"
    CORE = "core"
    GLUTES = "glutes"
    FULL_BODY = "full_body"
    CARDIO = "cardio"


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"


class WorkType(str, Enum):
    """Daily occupational load, used by the onboarding protocol rules."""

    SEDENTARY = "sedentary"
    MODERATE = "moderate"
    ACTIVE = "active"


class Goal(str, Enum):
    LOSE_WEIGHT = "lose_weight"
    BUILD_MUSCLE = "build_muscle"
    IMPROVE_STRENGTH = "improve_strength"
    INCREASE_FLEXIBILITY = "increase_flexibility"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


# ======================================================================
# Catalog
# ======================================================================


class ExerciseDefinition(BaseModel):
    """Immutable catalog entry.

    ``base_reps`` is ``None`` for timed exercises, which use
    ``base_duration`` (seconds per set) instead.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    short_description: str = ""
    type: ExerciseType
    muscle_groups: tuple[MuscleGroup, ...] = Field(..., min_length=1)
    difficulty: DifficultyLevel
    base_sets: int = Field(..., ge=1)
    base_reps: Optional[int] = Field(None, ge=1)
    base_duration: Optional[int] = Field(None, ge=1, description="Seconds per set")
    base_rest_time: int = Field(..., ge=0, description="Seconds between sets")
    calories_per_minute: float = Field(..., ge=0.0)
    difficulty_score: int = Field(..., ge=1, le=10, description="Ranking score, 1 = easiest")
    equipment_needed: tuple[str, ...] = ()
    is_active: bool = True
    is_custom: bool = False

    @property
    def primary_muscle_group(self) -> MuscleGroup:
        return self.muscle_groups[0]


class ExerciseCreate(BaseModel):
    """Payload for a custom catalog entry; the id is assigned on creation."""

    name: str = Field(..., min_length=1)
    short_description: str = ""
    type: ExerciseType
    muscle_groups: list[MuscleGroup] = Field(..., min_length=1)
    difficulty: DifficultyLevel
    base_sets: int = Field(..., ge=1)
    base_reps: Optional[int] = Field(None, ge=1)
    base_duration: Optional[int] = Field(None, ge=1)
    base_rest_time: int = Field(30, ge=0)
    calories_per_minute: float = Field(5.0, ge=0.0)
    difficulty_score: Optional[int] = Field(None, ge=1, le=10, description="Derived from the other fields if omitted")
    equipment_needed: list[str] = Field(default_factory=list)


class ExerciseUpdate(BaseModel):
    """Partial update; only fields that are set are applied."""

    name: Optional[str] = Field(None, min_length=1)
    short_description: Optional[str] = None
    type: Optional[ExerciseType] = None
    muscle_groups: Optional[list[MuscleGroup]] = Field(None, min_length=1)
    difficulty: Optional[DifficultyLevel] = None
    base_sets: Optional[int] = Field(None, ge=1)
    base_reps: Optional[int] = Field(None, ge=1)
    base_duration: Optional[int] = Field(None, ge=1)
    base_rest_time: Optional[int] = Field(None, ge=0)
    calories_per_minute: Optional[float] = Field(None, ge=0.0)
    difficulty_score: Optional[int] = Field(None, ge=1, le=10)
    equipment_needed: Optional[list[str]] = None


class CatalogStats(BaseModel):
    total: int
    active: int
    inactive: int
    custom_count: int
    by_difficulty: dict[DifficultyLevel, int]
    by_type: dict[ExerciseType, int]
    by_muscle_group: dict[MuscleGroup, int]


# ======================================================================
# User input
# ======================================================================


class UserAttributes(BaseModel):
    """Snapshot of the user profile the engine needs."""

    difficulty: Optional[DifficultyLevel] = Field(None, description="Assessed level; derived if omitted")
    day_number: int = Field(1, ge=1, description="1-based day in the programme")
    weight_kg: Optional[float] = Field(None, gt=0)
    height_cm: Optional[float] = Field(None, gt=0)
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY
    goal: Optional[Goal] = None
    gender: Optional[Gender] = None

    @property
    def bmi(self) -> float:
        """Body-mass index; 25.0 when weight or height is unknown."""
        if not self.weight_kg or not self.height_cm:
            return 25.0
        return self.weight_kg / (self.height_cm / 100) ** 2


# ======================================================================
# Progression
# ======================================================================


class ProgressionFactors(BaseModel):
    """Derived per invocation, never persisted."""

    day_number: int = Field(..., ge=1)
    week_number: int = Field(..., ge=1)
    completion_rate: float = Field(..., ge=0.0, le=100.0)
    streak_days: int = Field(..., ge=0)
    average_completion_percent: float = Field(..., ge=0.0, le=100.0)
    fasting_compliance: float = Field(..., ge=0.0, le=100.0)
    total_exercises_completed: int = Field(0, ge=0)


class ProgressionAdjustments(BaseModel):
    sets_multiplier: float = 1.0
    reps_multiplier: float = 1.0
    duration_multiplier: float = 1.0
    rest_time_multiplier: float = 1.0

    calorie_adjustment: int = 0
    portion_multiplier: float = 1.0
    protein_multiplier: float = 1.0

    recommended_fasting_protocol: FastingProtocol = FastingProtocol.SIXTEEN_EIGHT
    fasting_hours_adjustment: int = 0

    should_increase_difficulty: bool = False
    suggested_difficulty: DifficultyLevel = DifficultyLevel.BEGINNER

    progression_message: str = ""
    encouragement: str = ""


# ======================================================================
# Generated workout
# ======================================================================


class SelectedExercise(BaseModel):
    """A catalog entry with its adjusted prescription for one day."""

    model_config = ConfigDict(frozen=True)

    exercise: ExerciseDefinition
    adjusted_sets: int = Field(..., ge=1)
    adjusted_reps: Optional[int] = None
    adjusted_duration: Optional[int] = None
    adjusted_rest_time: int = Field(..., ge=0)
    order_index: int = Field(..., ge=0)

    @property
    def seconds(self) -> int:
        """Working plus resting time, 30 s per set when untimed."""
        per_set = self.adjusted_duration or 30
        return self.adjusted_sets * per_set + (self.adjusted_sets - 1) * self.adjusted_rest_time


class DailyWorkout(BaseModel):
    day_number: int
    focus_area: str
    difficulty: DifficultyLevel
    warmup_exercises: list[SelectedExercise] = Field(default_factory=list)
    main_exercises: list[SelectedExercise] = Field(default_factory=list)
    cooldown_exercises: list[SelectedExercise] = Field(default_factory=list)
    total_duration: int = Field(..., ge=0, description="Minutes, rounded up")
    total_calories: int = Field(..., ge=0)
    progression_message: str = ""


# ======================================================================
# API payloads
# ======================================================================


class WorkoutRequest(BaseModel):
    attributes: UserAttributes
    user_id: Optional[str] = Field(None, description="Reads fasting compliance from this user's history if given")
    exercise_count: Optional[int] = Field(None, ge=1, le=20)
    target_muscle_groups: Optional[list[MuscleGroup]] = None
    include_warmup: bool = True
    include_cooldown: bool = True
    completion_history: Optional[list[float]] = Field(
        None, description="Per-day completion percents, most recent last; estimated from the day number if omitted", )


class CanProceedRequest(BaseModel):
    current_index: int = Field(..., ge=0)
    completed_indices: list[int] = Field(default_factory=list)


class CanProceedResponse(BaseModel):
    can_proceed: bool
    missing_indices: list[int] = Field(default_factory=list)


class MealTargetsRequest(WorkoutRequest):
    base_calories: float = Field(..., gt=0, description="Planned daily calories before adjustment")
    base_protein: float = Field(..., ge=0, description="Planned daily protein in grams before adjustment")


class MealTargets(BaseModel):
    calories: int = Field(..., ge=0)
    protein: int = Field(..., ge=0)
    calorie_adjustment: int
    portion_multiplier: float
    protein_multiplier: float
