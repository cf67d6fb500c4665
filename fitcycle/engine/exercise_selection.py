"""
Daily exercise selection.

:func:`generate_daily_workout` picks a day's warm-up, main and cool-down
exercises from a catalog and prescribes them through the progression
engine.

Main selection
--------------

1. The day of the 7-day rotation names the target muscle groups.
2. Candidates are the user's tier plus a slice of the next easier tier
   (intermediate and advanced only), touching at least one target muscle,
   sorted by ``difficulty_score`` (stable, so catalog order breaks ties).
3. A greedy pass enforces variety: once half the slots are filled, an
   exercise is skipped if its ``(type, primary muscle)`` key was already
   used.
4. Fallbacks relax one filter at a time: variety, then difficulty, then
   muscle group.  Only an empty catalog is a hard failure.

The returned order (warm-up, main, cool-down) is the mandatory completion
order; see :func:`can_proceed_to_next`.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, Field

from fitcycle.core.exceptions import EmptyCatalogSelection
from fitcycle.engine.progression import (DEFAULT_PROGRESSION_CONFIG, ProgressionConfig, apply_exercise_adjustments,
                                         calculate_adjustments, compute_progression_factors, get_day_focus, )
from fitcycle.schemas.workout import (ActivityLevel, DailyWorkout, DifficultyLevel, ExerciseDefinition, ExerciseType,
                                      Goal, MuscleGroup, ProgressionAdjustments, ProgressionFactors, SelectedExercise,
                                      UserAttributes, )

logger = logging.getLogger(__name__)

# ======================================================================
# Configuration
# ======================================================================

DAILY_FOCUS_ROTATION: tuple[tuple[MuscleGroup, ...], ...] = (
    (MuscleGroup.CHEST, MuscleGroup.SHOULDERS, MuscleGroup.TRICEPS),
    (MuscleGroup.BACK, MuscleGroup.BICEPS),
    (MuscleGroup.LEGS, MuscleGroup.GLUTES),
    (MuscleGroup.CORE,),
    (MuscleGroup.CHEST, MuscleGroup.SHOULDERS, MuscleGroup.TRICEPS),
    (MuscleGroup.BACK, MuscleGroup.BICEPS),
    (MuscleGroup.FULL_BODY, MuscleGroup.CARDIO),
)

_EASIER_TIER = {
    DifficultyLevel.INTERMEDIATE: DifficultyLevel.BEGINNER,
    DifficultyLevel.ADVANCED: DifficultyLevel.INTERMEDIATE,
}


class SelectionConfig(BaseModel):
    """Tunable sizes and thresholds for the selection passes."""

    exercise_count: int = Field(6, ge=1)
    adjacent_tier_slice: int = Field(5, ge=0)
    warmup_count: int = Field(3, ge=0)
    warmup_max_score: int = 2
    cooldown_count: int = Field(2, ge=0)
    cooldown_max_score: int = 2
    cooldown_fallback_max_score: int = 1
    default_set_seconds: int = Field(30, ge=1)


DEFAULT_SELECTION_CONFIG = SelectionConfig()


def focus_muscles(day_number: int) -> tuple[MuscleGroup, ...]:
    return DAILY_FOCUS_ROTATION[(day_number - 1) % 7]


def derive_difficulty(attributes: UserAttributes) -> DifficultyLevel:
    """Explicit assessment wins; otherwise activity level and BMI decide."""
    if attributes.difficulty is not None:
        return attributes.difficulty
    bmi = attributes.bmi
    if attributes.activity_level is ActivityLevel.SEDENTARY or bmi >= 30:
        return DifficultyLevel.BEGINNER
    if attributes.activity_level is ActivityLevel.VERY_ACTIVE and bmi < 25:
        return DifficultyLevel.ADVANCED
    return DifficultyLevel.INTERMEDIATE


# ======================================================================
# Main entry point
# ======================================================================


def generate_daily_workout(attributes: UserAttributes, catalog: Sequence[ExerciseDefinition],
                           factors: Optional[ProgressionFactors] = None,
                           target_muscle_groups: Optional[Sequence[MuscleGroup]] = None,
                           exercise_count: Optional[int] = None, include_warmup: bool = True,
                           include_cooldown: bool = True,
                           config: SelectionConfig = DEFAULT_SELECTION_CONFIG,
                           progression_config: ProgressionConfig = DEFAULT_PROGRESSION_CONFIG, ) -> DailyWorkout:
    """Build the :class:`DailyWorkout` for ``attributes.day_number``.

    Args:
        attributes: User snapshot; difficulty is derived when absent.
        catalog: Active catalog entries, in catalog order.
        factors: Progression factors; estimated from the day number if
            omitted.
        target_muscle_groups: Overrides the rotation's muscle groups (the
            focus label still follows the rotation).

    Raises:
        EmptyCatalogSelection: if *catalog* holds no active exercise.
    """
    active = [exercise for exercise in catalog if exercise.is_active]
    if not active:
        raise EmptyCatalogSelection("exercise catalog is empty")

    day = attributes.day_number
    difficulty = derive_difficulty(attributes)
    muscles = tuple(target_muscle_groups) if target_muscle_groups else focus_muscles(day)
    count = exercise_count or config.exercise_count

    if factors is None:
        factors = compute_progression_factors(day, config=progression_config)
    assessed = attributes.model_copy(update={"difficulty": difficulty})
    adjustments = calculate_adjustments(assessed, factors, progression_config)

    main = select_main_exercises(active, muscles, difficulty, count, config)
    used = {exercise.id for exercise in main}

    warmup: list[ExerciseDefinition] = []
    if include_warmup:
        warmup = select_warmup_exercises(active, used, config)
        used.update(exercise.id for exercise in warmup)

    cooldown: list[ExerciseDefinition] = []
    if include_cooldown:
        cooldown = select_cooldown_exercises(active, used, config)

    warmup_selected = _prescribe(warmup, adjustments, progression_config, warmup=True)
    main_selected = _prescribe(main, adjustments, progression_config)
    cooldown_selected = _prescribe(cooldown, adjustments, progression_config, cooldown=True)

    everything = [*warmup_selected, *main_selected, *cooldown_selected]
    duration = total_duration_minutes(everything)

    return DailyWorkout(day_number=day, focus_area=get_day_focus(day), difficulty=difficulty,
                        warmup_exercises=warmup_selected, main_exercises=main_selected,
                        cooldown_exercises=cooldown_selected, total_duration=duration,
                        total_calories=total_calories(everything, duration),
                        progression_message=adjustments.progression_message, )


# ======================================================================
# Selection passes
# ======================================================================


def select_main_exercises(catalog: Sequence[ExerciseDefinition], muscles: Sequence[MuscleGroup],
                          difficulty: DifficultyLevel, count: int,
                          config: SelectionConfig = DEFAULT_SELECTION_CONFIG, ) -> list[ExerciseDefinition]:
    """Pick up to *count* distinct exercises for *muscles*.

    Returns fewer than *count* only when the whole catalog holds fewer
    exercises.
    """
    if not catalog:
        raise EmptyCatalogSelection("exercise catalog is empty")

    targets = set(muscles)
    pool = [e for e in catalog if e.difficulty is difficulty]
    easier = _EASIER_TIER.get(difficulty)
    if easier is not None:
        pool += [e for e in catalog if e.difficulty is easier][:config.adjacent_tier_slice]

    candidates = sorted((e for e in pool if targets.intersection(e.muscle_groups)), key=lambda e: e.difficulty_score)

    selected: list[ExerciseDefinition] = []
    chosen: set[str] = set()
    used_keys: set[tuple[ExerciseType, MuscleGroup]] = set()
    for exercise in candidates:
        if len(selected) >= count:
            break
        key = (exercise.type, exercise.primary_muscle_group)
        if key in used_keys and len(selected) >= count / 2:
            continue
        selected.append(exercise)
        chosen.add(exercise.id)
        used_keys.add(key)

    fallbacks = (
        ("variety", candidates),
        ("difficulty", sorted((e for e in catalog if targets.intersection(e.muscle_groups)),
                              key=lambda e: e.difficulty_score)),
        ("muscle group", catalog),
    )
    for relaxed, source in fallbacks:
        if len(selected) >= count:
            break
        before = len(selected)
        _fill(selected, chosen, source, count)
        if len(selected) > before:
            logger.info("Relaxed %s filter: added %d exercise(s) for %s/%s", relaxed, len(selected) - before,
                        difficulty.value, ",".join(m.value for m in muscles))

    return selected


def select_warmup_exercises(catalog: Sequence[ExerciseDefinition], exclude: Iterable[str] = (),
                            config: SelectionConfig = DEFAULT_SELECTION_CONFIG, ) -> list[ExerciseDefinition]:
    """Gentle beginner cardio or mobility moves, in catalog order."""
    skip = set(exclude)
    candidates = [e for e in catalog
                  if e.id not in skip and e.difficulty is DifficultyLevel.BEGINNER
                  and e.type in (ExerciseType.CARDIO, ExerciseType.FLEXIBILITY)
                  and e.difficulty_score <= config.warmup_max_score]
    return candidates[:config.warmup_count]


def select_cooldown_exercises(catalog: Sequence[ExerciseDefinition], exclude: Iterable[str] = (),
                              config: SelectionConfig = DEFAULT_SELECTION_CONFIG, ) -> list[ExerciseDefinition]:
    """Beginner stretches, or the lowest-scored moves when too few exist."""
    skip = set(exclude)
    candidates = [e for e in catalog
                  if e.id not in skip and e.difficulty is DifficultyLevel.BEGINNER
                  and e.type is ExerciseType.FLEXIBILITY and e.difficulty_score <= config.cooldown_max_score]
    if len(candidates) >= config.cooldown_count:
        return candidates[:config.cooldown_count]
    logger.info("Only %d stretch(es) available for cool-down; using low-intensity moves", len(candidates))
    fallback = [e for e in catalog if e.id not in skip and e.difficulty_score <= config.cooldown_fallback_max_score]
    return fallback[:config.cooldown_count]


def _fill(selected: list[ExerciseDefinition], chosen: set[str], source: Iterable[ExerciseDefinition],
          count: int) -> None:
    for exercise in source:
        if len(selected) >= count:
            return
        if exercise.id not in chosen:
            selected.append(exercise)
            chosen.add(exercise.id)


def _prescribe(exercises: Sequence[ExerciseDefinition], adjustments: ProgressionAdjustments,
               config: ProgressionConfig, warmup: bool = False, cooldown: bool = False, ) -> list[SelectedExercise]:
    result = []
    for index, exercise in enumerate(exercises):
        p = apply_exercise_adjustments(exercise, adjustments, warmup=warmup, cooldown=cooldown, config=config)
        result.append(SelectedExercise(exercise=exercise, adjusted_sets=p.sets, adjusted_reps=p.reps,
                                       adjusted_duration=p.duration, adjusted_rest_time=p.rest_time,
                                       order_index=index, ))
    return result


# ======================================================================
# Totals & sequencing
# ======================================================================


def total_duration_minutes(exercises: Iterable[SelectedExercise]) -> int:
    """Sum of working and resting time, rounded up to whole minutes."""
    return math.ceil(sum(exercise.seconds for exercise in exercises) / 60)


def total_calories(exercises: Sequence[SelectedExercise], duration_minutes: int) -> int:
    """Mean calories-per-minute of the selection times the duration."""
    if not exercises:
        return 0
    mean = sum(e.exercise.calories_per_minute for e in exercises) / len(exercises)
    return math.floor(mean * duration_minutes + 0.5)


def exercise_sequence(workout: DailyWorkout) -> list[SelectedExercise]:
    """All of a day's exercises in completion order, re-indexed from 0."""
    ordered = [*workout.warmup_exercises, *workout.main_exercises, *workout.cooldown_exercises]
    return [exercise.model_copy(update={"order_index": index}) for index, exercise in enumerate(ordered)]


def missing_before(current_index: int, completed_indices: Iterable[int]) -> list[int]:
    """Indices below *current_index* that are not yet completed."""
    done = set(completed_indices)
    return [i for i in range(current_index) if i not in done]


def can_proceed_to_next(current_index: int, completed_indices: Iterable[int]) -> bool:
    """Whether every exercise before *current_index* is completed."""
    return not missing_before(current_index, completed_indices)


# ======================================================================
# Recommendations
# ======================================================================


def recommend_exercises(catalog: Sequence[ExerciseDefinition], goal: Optional[Goal], difficulty: DifficultyLevel,
                        count: int = 10, ) -> list[ExerciseDefinition]:
    """Goal-specific exercises at *difficulty*, highest calorie burn first."""
    if goal is Goal.LOSE_WEIGHT:
        matching = [e for e in catalog if e.type in (ExerciseType.CARDIO, ExerciseType.HIIT)]
    elif goal is Goal.BUILD_MUSCLE:
        matching = [e for e in catalog if e.type is ExerciseType.STRENGTH and e.calories_per_minute >= 6]
    elif goal is Goal.IMPROVE_STRENGTH:
        matching = [e for e in catalog if e.type is ExerciseType.STRENGTH and e.difficulty_score >= 6]
    elif goal is Goal.INCREASE_FLEXIBILITY:
        matching = [e for e in catalog if e.type is ExerciseType.FLEXIBILITY]
    else:
        matching = list(catalog)

    at_level = [e for e in matching if e.difficulty is difficulty and e.is_active]
    return sorted(at_level, key=lambda e: e.calories_per_minute, reverse=True)[:count]
