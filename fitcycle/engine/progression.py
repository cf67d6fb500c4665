"""
Progression engine.

Turns a user's position in the programme (day, week) and adherence
(completion rate, streak) into multiplicative adjustments applied to the
base prescription of every catalog exercise.

Rules
-----

- sets      +10 % every 2 weeks, capped at x1.5        (completion >= 70 %)
- reps      +5 % every 7 days, capped at x1.3          (completion >= 70 %)
- duration  x1.1 after day 14 (>= 80 %), x1.2 after day 28 (>= 85 %)
- rest      x0.9 with completion >= 90 % and a 7-day streak

Adjusted values never fall below 1 set, 5 reps or 15 s rest.  Warm-up and
cool-down dampening is applied *after* the general adjustment and is not
derived from it.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from fitcycle.schemas.fasting import FastingProtocol
from fitcycle.schemas.workout import (DifficultyLevel, ExerciseDefinition, Gender, Goal, ProgressionAdjustments,
                                      ProgressionFactors, UserAttributes, )

# ======================================================================
# Configuration
# ======================================================================


class ProgressionConfig(BaseModel):
    """Tunable thresholds for :func:`calculate_adjustments`."""

    sets_every_weeks: int = Field(2, ge=1)
    sets_step: float = 0.1
    sets_max_multiplier: float = 1.5

    reps_every_days: int = Field(7, ge=1)
    reps_step: float = 0.05
    reps_max_multiplier: float = 1.3

    volume_min_completion: float = 70.0

    upgrade_min_completion: float = 80.0
    upgrade_min_streak: int = 7
    upgrade_min_week: int = 4

    min_sets: int = 1
    min_reps: int = 5
    min_rest_seconds: int = 15

    history_window_days: int = Field(14, ge=1, description="Trailing days used for the completion rate")


DEFAULT_PROGRESSION_CONFIG = ProgressionConfig()

_DAY_FOCUS = (
    "Push (Chest, Shoulders, Triceps)",
    "Pull (Back, Biceps)",
    "Legs & Glutes",
    "Core & Stability",
    "Push (Chest, Shoulders, Triceps)",
    "Pull (Back, Biceps)",
    "Active Recovery & Cardio",
)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def week_number(day_number: int) -> int:
    return (day_number - 1) // 7 + 1


def get_day_focus(day_number: int) -> str:
    """Focus-area label of the 7-day rotation."""
    return _DAY_FOCUS[(day_number - 1) % 7]


# ======================================================================
# Factors
# ======================================================================


def compute_progression_factors(day_number: int, completion_history: Optional[Sequence[float]] = None,
                                streak_days: Optional[int] = None, fasting_compliance: float = 75.0,
                                config: ProgressionConfig = DEFAULT_PROGRESSION_CONFIG, ) -> ProgressionFactors:
    """Derive :class:`ProgressionFactors` for *day_number*.

    *completion_history* holds one completion percent per programme day,
    most recent last.  The completion rate is the share of days in the
    trailing window at 100 %; the average is the plain mean.  Without
    history both are estimated from the day number, as is the streak.
    """
    if completion_history:
        recent = list(completion_history)[-config.history_window_days:]
        completion_rate = sum(1 for p in recent if p >= 100.0) / len(recent) * 100
        average = sum(min(max(p, 0.0), 100.0) for p in recent) / len(recent)
        if streak_days is None:
            streak_days = 0
            for percent in reversed(completion_history):
                if percent < 100.0:
                    break
                streak_days += 1
    else:
        completion_rate = min(85.0, 60.0 + day_number * 0.5)
        average = completion_rate
        if streak_days is None:
            streak_days = min(day_number, 14)

    return ProgressionFactors(day_number=day_number, week_number=week_number(day_number),
                              completion_rate=round(completion_rate, 2), streak_days=streak_days,
                              average_completion_percent=round(average, 2),
                              fasting_compliance=min(max(fasting_compliance, 0.0), 100.0),
                              total_exercises_completed=day_number * 6, )


# ======================================================================
# Adjustments
# ======================================================================


def calculate_adjustments(attributes: UserAttributes, factors: ProgressionFactors,
                          config: ProgressionConfig = DEFAULT_PROGRESSION_CONFIG, ) -> ProgressionAdjustments:
    """Compute every progression adjustment for one day."""
    completion = factors.completion_rate
    week = factors.week_number
    day = factors.day_number

    sets_multiplier = 1.0
    reps_multiplier = 1.0
    if completion >= config.volume_min_completion:
        sets_multiplier = min(1 + (week // config.sets_every_weeks) * config.sets_step, config.sets_max_multiplier)
        reps_multiplier = min(1 + (day // config.reps_every_days) * config.reps_step, config.reps_max_multiplier)

    duration_multiplier = 1.0
    if day > 14 and completion >= 80:
        duration_multiplier = 1.1
    if day > 28 and completion >= 85:
        duration_multiplier = 1.2

    rest_multiplier = 0.9 if completion >= 90 and factors.streak_days >= 7 else 1.0

    calorie_adjustment = 0
    protein_multiplier = 1.0
    if attributes.goal is Goal.LOSE_WEIGHT:
        if week >= 2 and completion >= 75:
            calorie_adjustment = -100
        if week >= 4 and completion >= 80:
            calorie_adjustment = -200
    elif attributes.goal is Goal.BUILD_MUSCLE:
        if week >= 2 and completion >= 80:
            calorie_adjustment, protein_multiplier = 150, 1.1
        if week >= 4 and completion >= 85:
            calorie_adjustment, protein_multiplier = 250, 1.15

    portion_multiplier = 1.0
    if factors.average_completion_percent >= 85:
        portion_multiplier = 1.1 if attributes.goal is Goal.BUILD_MUSCLE else 0.95

    protocol, hours_adjustment = recommend_fasting_progression(attributes, factors)
    should_upgrade, suggested = check_difficulty_upgrade(attributes.difficulty or DifficultyLevel.BEGINNER, factors,
                                                         config)
    message, encouragement = progression_messages(attributes.gender, factors, should_upgrade)

    return ProgressionAdjustments(sets_multiplier=sets_multiplier, reps_multiplier=reps_multiplier,
                                  duration_multiplier=duration_multiplier, rest_time_multiplier=rest_multiplier,
                                  calorie_adjustment=calorie_adjustment, portion_multiplier=portion_multiplier,
                                  protein_multiplier=protein_multiplier, recommended_fasting_protocol=protocol,
                                  fasting_hours_adjustment=hours_adjustment, should_increase_difficulty=should_upgrade,
                                  suggested_difficulty=suggested, progression_message=message,
                                  encouragement=encouragement, )


def recommend_fasting_progression(attributes: UserAttributes,
                                  factors: ProgressionFactors, ) -> tuple[FastingProtocol, int]:
    """(recommended protocol, change in fasting hours versus 16:8)."""
    if attributes.goal is Goal.LOSE_WEIGHT:
        if factors.fasting_compliance >= 80 and factors.week_number >= 2 and attributes.bmi >= 25:
            return FastingProtocol.EIGHTEEN_SIX, 2
    elif attributes.goal is Goal.BUILD_MUSCLE and factors.week_number >= 2:
        return FastingProtocol.FOURTEEN_TEN, -2
    return FastingProtocol.SIXTEEN_EIGHT, 0


def check_difficulty_upgrade(current: DifficultyLevel, factors: ProgressionFactors,
                             config: ProgressionConfig = DEFAULT_PROGRESSION_CONFIG, ) -> tuple[bool, DifficultyLevel]:
    """Suggest the next tier once adherence has been sustained long enough."""
    ready = (factors.completion_rate >= config.upgrade_min_completion
             and factors.streak_days >= config.upgrade_min_streak
             and factors.week_number >= config.upgrade_min_week)
    nxt = current.next_tier
    if ready and nxt is not None:
        return True, nxt
    return False, current


def progression_messages(gender: Optional[Gender], factors: ProgressionFactors,
                         should_upgrade: bool, ) -> tuple[str, str]:
    """(progression message, encouragement) in the user's register."""
    male = gender is Gender.MALE
    message = ""
    if factors.week_number == 1:
        message = ("Week 1: Foundation building. Master the basics, soldier." if male
                   else "Week 1: Building your foundation. You're doing amazing!")
    elif factors.week_number == 2:
        message = ("Week 2: Intensity increasing. Sets and reps progressing." if male
                   else "Week 2: Growing stronger! We're adding a little more challenge.")
    elif factors.week_number == 4:
        message = ("Week 4: Tactical upgrade. You're becoming a machine." if male
                   else "Week 4: Look how far you've come! Time to level up.")

    encouragement = ""
    if factors.streak_days >= 7:
        encouragement = (f"{factors.streak_days}-day streak! Unstoppable discipline." if male
                         else f"{factors.streak_days} days in a row! You're incredible!")
    elif factors.streak_days >= 3:
        encouragement = "Momentum building. Keep pushing." if male else "You're on a roll! Keep it up!"

    if should_upgrade:
        message = ("PROMOTION READY: You've earned the right to advance." if male
                   else "You're ready for the next level! Congratulations!")
    return message, encouragement


# ======================================================================
# Application to an exercise
# ======================================================================


class AdjustedPrescription(BaseModel):
    sets: int
    reps: Optional[int] = None
    duration: Optional[int] = None
    rest_time: int


def apply_exercise_adjustments(exercise: ExerciseDefinition, adjustments: ProgressionAdjustments,
                               warmup: bool = False, cooldown: bool = False,
                               config: ProgressionConfig = DEFAULT_PROGRESSION_CONFIG, ) -> AdjustedPrescription:
    """Scale the base prescription of *exercise* and enforce the floors.

    Warm-ups keep about half the sets, 60 % of the reps and half the
    duration.  Cool-downs are pinned to one set of at least 20 s with the
    rest halved.
    """
    sets = max(config.min_sets, _round_half_up(exercise.base_sets * adjustments.sets_multiplier))
    reps = None
    if exercise.base_reps is not None:
        reps = max(config.min_reps, _round_half_up(exercise.base_reps * adjustments.reps_multiplier))
    duration = None
    if exercise.base_duration is not None:
        duration = _round_half_up(exercise.base_duration * adjustments.duration_multiplier)
    rest = max(config.min_rest_seconds, _round_half_up(exercise.base_rest_time * adjustments.rest_time_multiplier))

    if warmup:
        sets = max(config.min_sets, math.floor(sets * 0.5))
        if reps is not None:
            reps = max(config.min_reps, math.floor(reps * 0.6))
        if duration is not None:
            duration = max(1, math.floor(duration * 0.5))

    if cooldown:
        sets = 1
        if duration is not None:
            duration = max(20, duration)
        rest = max(config.min_rest_seconds, math.floor(rest * 0.5))

    return AdjustedPrescription(sets=sets, reps=reps, duration=duration, rest_time=rest)


def apply_meal_adjustments(base_calories: float, base_protein: float,
                           adjustments: ProgressionAdjustments, ) -> tuple[int, int]:
    """(calories, protein grams) after the goal-driven nutrition adjustments."""
    calories = _round_half_up((base_calories + adjustments.calorie_adjustment) * adjustments.portion_multiplier)
    protein = _round_half_up(base_protein * adjustments.protein_multiplier)
    return calories, protein
