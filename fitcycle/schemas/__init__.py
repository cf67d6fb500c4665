"""Pydantic schemas for the engine, persistence and request/response validation."""

from fitcycle.schemas.fasting import (
    CustomWindowUpdate,
    CycleAction,
    CycleState,
    CycleTransitionResponse,
    FastingCycle,
    FastingProtocol,
    FastingState,
    FastingStats,
    FastingWindow,
    Phase,
    PhaseStatus,
    PlanUpdate,
    ProtocolInfo,
    SyncResponse,
    TimeRemaining,
)
from fitcycle.schemas.workout import (
    ActivityLevel,
    CanProceedRequest,
    CanProceedResponse,
    CatalogStats,
    DailyWorkout,
    DifficultyLevel,
    ExerciseCreate,
    ExerciseDefinition,
    ExerciseType,
    ExerciseUpdate,
    Gender,
    Goal,
    MealTargets,
    MealTargetsRequest,
    MuscleGroup,
    ProgressionAdjustments,
    ProgressionFactors,
    SelectedExercise,
    UserAttributes,
    WorkoutRequest,
    WorkType,
)

__all__ = [
    # Fasting
    "CustomWindowUpdate",
    "CycleAction",
    "CycleState",
    "CycleTransitionResponse",
    "FastingCycle",
    "FastingProtocol",
    "FastingState",
    "FastingStats",
    "FastingWindow",
    "Phase",
    "PhaseStatus",
    "PlanUpdate",
    "ProtocolInfo",
    "SyncResponse",
    "TimeRemaining",
    # Workout
    "ActivityLevel",
    "CanProceedRequest",
    "CanProceedResponse",
    "CatalogStats",
    "DailyWorkout",
    "DifficultyLevel",
    "ExerciseCreate",
    "ExerciseDefinition",
    "ExerciseType",
    "ExerciseUpdate",
    "Gender",
    "Goal",
    "MealTargets",
    "MealTargetsRequest",
    "MuscleGroup",
    "ProgressionAdjustments",
    "ProgressionFactors",
    "SelectedExercise",
    "UserAttributes",
    "WorkoutRequest",
    "WorkType",
]
