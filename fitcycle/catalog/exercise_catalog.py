"""
Built-in exercise catalog.

Reference data only: the tuple is immutable and never edited at runtime.
Custom entries, overrides and deactivation are layered on top by
:class:`~fitcycle.catalog.repository.InMemoryExerciseRepository`.

Ordering matters.  Within a tier, entries are listed roughly easiest first,
and the selection engine takes warm-up and cool-down candidates in catalog
order, so the gentlest cardio and mobility moves come first.
"""

from __future__ import annotations

from typing import Optional

from fitcycle.schemas.workout import (DifficultyLevel, ExerciseDefinition, ExerciseType, MuscleGroup, )

# ======================================================================
# Helpers
# ======================================================================

# Aliases for brevity in the table below
STR = ExerciseType.STRENGTH
CAR = ExerciseType.CARDIO
FLX = ExerciseType.FLEXIBILITY
HIIT = ExerciseType.HIIT

BEG = DifficultyLevel.BEGINNER
INT = DifficultyLevel.INTERMEDIATE
ADV = DifficultyLevel.ADVANCED

CHEST = MuscleGroup.CHEST
BACK = MuscleGroup.BACK
SHOULDERS = MuscleGroup.SHOULDERS
BICEPS = MuscleGroup.BICEPS
TRICEPS = MuscleGroup.TRICEPS
LEGS = MuscleGroup.LEGS
CORE = MuscleGroup.CORE
GLUTES = MuscleGroup.GLUTES
FULL = MuscleGroup.FULL_BODY
CARDIO = MuscleGroup.CARDIO


def _ex(exercise_id: str, name: str, kind: ExerciseType, muscles: tuple[MuscleGroup, ...],
        difficulty: DifficultyLevel, sets: int, reps: Optional[int], duration: Optional[int], rest: int,
        calories: float, score: int, equipment: tuple[str, ...] = (), description: str = "", ) -> ExerciseDefinition:
    return ExerciseDefinition(id=exercise_id, name=name, short_description=description, type=kind,
                              muscle_groups=muscles, difficulty=difficulty, base_sets=sets, base_reps=reps,
                              base_duration=duration, base_rest_time=rest, calories_per_minute=calories,
                              difficulty_score=score, equipment_needed=equipment, )


# ======================================================================
# Built-in exercises
# ======================================================================

#  id, name, type, muscles, tier, sets, reps, duration (s), rest (s), kcal/min, score
BUILTIN_EXERCISES: tuple[ExerciseDefinition, ...] = (
    # ── Beginner: warm-up cardio & mobility ───────────────────────
    _ex("jumping_jacks", "Jumping Jacks", CAR, (FULL, CARDIO), BEG, 2, None, 30, 15, 8.0, 1,
        description="Full-body rhythmic jump to raise the heart rate."),
    _ex("marching_in_place", "Marching in Place", CAR, (CARDIO, LEGS), BEG, 2, None, 45, 15, 4.0, 1),
    _ex("arm_circles", "Arm Circles", FLX, (SHOULDERS,), BEG, 2, None, 30, 15, 2.5, 1),
    _ex("high_knees_slow", "Slow High Knees", CAR, (CARDIO, LEGS), BEG, 2, None, 30, 20, 7.0, 2),
    _ex("step_touch", "Step Touch", CAR, (CARDIO, FULL), BEG, 3, None, 60, 30, 5.0, 2),
    _ex("brisk_walk", "Brisk Walk", CAR, (CARDIO, LEGS), BEG, 1, None, 300, 15, 4.5, 1),
    # ── Beginner: stretches ──────────────────────────────────────
    _ex("childs_pose", "Child's Pose", FLX, (BACK, CORE), BEG, 1, None, 45, 15, 2.0, 1),
    _ex("hamstring_stretch", "Standing Hamstring Stretch", FLX, (LEGS,), BEG, 1, None, 30, 15, 2.0, 1),
    _ex("chest_opener_stretch", "Chest Opener Stretch", FLX, (CHEST, SHOULDERS), BEG, 1, None, 30, 15, 2.0, 2),
    _ex("cat_cow", "Cat-Cow", FLX, (BACK, CORE), BEG, 2, None, 40, 15, 2.5, 2),
    _ex("hip_flexor_stretch", "Kneeling Hip Flexor Stretch", FLX, (LEGS, GLUTES), BEG, 1, None, 40, 15, 2.0, 2),
    # ── Beginner: push ───────────────────────────────────────────
    _ex("wall_push_up", "Wall Push-Up", STR, (CHEST, TRICEPS), BEG, 2, 10, None, 45, 4.0, 2),
    _ex("incline_push_up", "Incline Push-Up", STR, (CHEST, SHOULDERS), BEG, 3, 10, None, 60, 5.0, 3, ("bench",)),
    _ex("knee_push_up", "Knee Push-Up", STR, (CHEST, TRICEPS, SHOULDERS), BEG, 3, 8, None, 60, 5.0, 3),
    _ex("shoulder_taps", "Shoulder Taps", STR, (SHOULDERS, CORE), BEG, 2, 12, None, 45, 4.5, 3),
    _ex("bent_knee_bench_dip", "Bent-Knee Bench Dip", STR, (TRICEPS,), BEG, 2, 8, None, 60, 4.5, 3, ("bench",)),
    # ── Beginner: pull ───────────────────────────────────────────
    _ex("superman", "Superman Hold", STR, (BACK, GLUTES), BEG, 3, 10, None, 45, 3.5, 2),
    _ex("reverse_snow_angel", "Reverse Snow Angel", STR, (BACK, SHOULDERS), BEG, 2, 10, None, 45, 3.0, 2),
    _ex("band_bicep_curl", "Band Bicep Curl", STR, (BICEPS,), BEG, 3, 12, None, 45, 3.5, 2, ("resistance band",)),
    _ex("band_row", "Resistance Band Row", STR, (BACK, BICEPS), BEG, 3, 12, None, 60, 4.0, 3, ("resistance band",)),
    _ex("doorway_row", "Doorway Row", STR, (BACK, BICEPS), BEG, 3, 10, None, 60, 4.0, 3),
    # ── Beginner: legs ───────────────────────────────────────────
    _ex("bodyweight_squat", "Bodyweight Squat", STR, (LEGS, GLUTES), BEG, 3, 12, None, 60, 5.5, 2),
    _ex("glute_bridge", "Glute Bridge", STR, (GLUTES, LEGS), BEG, 3, 12, None, 45, 4.0, 2),
    _ex("calf_raise", "Calf Raise", STR, (LEGS,), BEG, 3, 15, None, 45, 3.5, 2),
    _ex("reverse_lunge", "Reverse Lunge", STR, (LEGS, GLUTES), BEG, 3, 8, None, 60, 5.5, 3),
    _ex("wall_sit", "Wall Sit", STR, (LEGS,), BEG, 3, None, 30, 45, 4.0, 3),
    # ── Beginner: core ───────────────────────────────────────────
    _ex("dead_bug", "Dead Bug", STR, (CORE,), BEG, 3, 10, None, 45, 3.5, 2),
    _ex("bird_dog", "Bird Dog", STR, (CORE, BACK), BEG, 3, 10, None, 45, 3.0, 2),
    _ex("crunch", "Crunch", STR, (CORE,), BEG, 3, 12, None, 45, 4.0, 2),
    _ex("plank", "Forearm Plank", STR, (CORE,), BEG, 3, None, 20, 45, 4.0, 2),
    _ex("knee_side_plank", "Knee Side Plank", STR, (CORE,), BEG, 2, None, 20, 30, 3.5, 3),
    _ex("walkout", "Inchworm Walkout", HIIT, (FULL, CORE), BEG, 3, 6, None, 60, 6.0, 4),

    # ── Intermediate: push ───────────────────────────────────────
    _ex("push_up", "Push-Up", STR, (CHEST, TRICEPS, SHOULDERS), INT, 3, 12, None, 60, 7.0, 4),
    _ex("bench_dip", "Bench Dip", STR, (TRICEPS,), INT, 3, 12, None, 60, 6.0, 4, ("bench",)),
    _ex("diamond_push_up", "Diamond Push-Up", STR, (TRICEPS, CHEST), INT, 3, 10, None, 60, 7.0, 5),
    _ex("pike_push_up", "Pike Push-Up", STR, (SHOULDERS, TRICEPS), INT, 3, 8, None, 75, 6.5, 5),
    _ex("decline_push_up", "Decline Push-Up", STR, (CHEST, SHOULDERS), INT, 3, 10, None, 60, 7.0, 5, ("bench",)),
    _ex("dumbbell_shoulder_press", "Dumbbell Shoulder Press", STR, (SHOULDERS, TRICEPS), INT, 3, 10, None, 75, 6.0,
        5, ("dumbbells",)),
    # ── Intermediate: pull ───────────────────────────────────────
    _ex("dumbbell_row", "Dumbbell Row", STR, (BACK, BICEPS), INT, 3, 10, None, 60, 6.0, 4, ("dumbbells",)),
    _ex("dumbbell_curl", "Dumbbell Curl", STR, (BICEPS,), INT, 3, 12, None, 45, 4.5, 4, ("dumbbells",)),
    _ex("hammer_curl", "Hammer Curl", STR, (BICEPS,), INT, 3, 10, None, 45, 4.5, 4, ("dumbbells",)),
    _ex("band_pull_apart", "Band Pull-Apart", STR, (BACK, SHOULDERS), INT, 3, 15, None, 45, 4.0, 4,
        ("resistance band",)),
    _ex("inverted_row", "Inverted Row", STR, (BACK, BICEPS), INT, 3, 10, None, 75, 6.5, 5, ("low bar",)),
    # ── Intermediate: legs ───────────────────────────────────────
    _ex("step_up", "Step-Up", STR, (LEGS, GLUTES), INT, 3, 10, None, 60, 7.0, 4, ("step",)),
    _ex("sumo_squat", "Sumo Squat", STR, (LEGS, GLUTES), INT, 3, 15, None, 60, 6.5, 4),
    _ex("single_leg_glute_bridge", "Single-Leg Glute Bridge", STR, (GLUTES,), INT, 3, 10, None, 45, 5.0, 4),
    _ex("goblet_squat", "Goblet Squat", STR, (LEGS, GLUTES), INT, 3, 12, None, 75, 7.5, 5, ("dumbbell",)),
    _ex("walking_lunge", "Walking Lunge", STR, (LEGS, GLUTES), INT, 3, 12, None, 60, 7.0, 5),
    # ── Intermediate: core ───────────────────────────────────────
    _ex("bicycle_crunch", "Bicycle Crunch", STR, (CORE,), INT, 3, 20, None, 45, 6.0, 4),
    _ex("russian_twist", "Russian Twist", STR, (CORE,), INT, 3, 20, None, 45, 5.5, 4),
    _ex("hollow_hold", "Hollow Body Hold", STR, (CORE,), INT, 3, None, 30, 45, 5.0, 5),
    _ex("leg_raise", "Lying Leg Raise", STR, (CORE,), INT, 3, 12, None, 45, 5.0, 5),
    _ex("mountain_climber", "Mountain Climber", HIIT, (CORE, CARDIO, FULL), INT, 3, None, 30, 30, 10.0, 5),
    # ── Intermediate: conditioning & mobility ────────────────────
    _ex("downward_dog", "Downward Dog", FLX, (SHOULDERS, LEGS, BACK), INT, 2, None, 45, 15, 3.0, 4),
    _ex("pigeon_pose", "Pigeon Pose", FLX, (GLUTES, LEGS), INT, 2, None, 45, 15, 2.5, 4),
    _ex("jump_rope", "Jump Rope", CAR, (CARDIO, FULL), INT, 3, None, 60, 45, 11.0, 5, ("jump rope",)),
    _ex("skater_hop", "Skater Hop", CAR, (CARDIO, LEGS), INT, 3, None, 40, 40, 9.0, 5),
    _ex("burpee", "Burpee", HIIT, (FULL, CARDIO), INT, 3, 10, None, 60, 11.0, 6),

    # ── Advanced: push ───────────────────────────────────────────
    _ex("barbell_bench_press", "Barbell Bench Press", STR, (CHEST, TRICEPS, SHOULDERS), ADV, 4, 8, None, 120, 7.5,
        7, ("barbell", "bench")),
    _ex("weighted_dip", "Weighted Dip", STR, (TRICEPS, CHEST), ADV, 4, 8, None, 90, 8.0, 8, ("dip bars",)),
    _ex("archer_push_up", "Archer Push-Up", STR, (CHEST, TRICEPS), ADV, 4, 6, None, 90, 8.0, 8),
    _ex("clap_push_up", "Clap Push-Up", STR, (CHEST, TRICEPS, SHOULDERS), ADV, 4, 8, None, 90, 9.0, 8),
    _ex("handstand_push_up", "Handstand Push-Up", STR, (SHOULDERS, TRICEPS), ADV, 4, 5, None, 120, 8.5, 9, ("wall",)),
    # ── Advanced: pull ───────────────────────────────────────────
    _ex("pull_up", "Pull-Up", STR, (BACK, BICEPS), ADV, 4, 8, None, 90, 8.5, 7, ("pull-up bar",)),
    _ex("chin_up", "Chin-Up", STR, (BICEPS, BACK), ADV, 4, 8, None, 90, 8.5, 7, ("pull-up bar",)),
    _ex("barbell_row", "Barbell Row", STR, (BACK, BICEPS), ADV, 4, 8, None, 90, 8.0, 7, ("barbell",)),
    _ex("muscle_up", "Muscle-Up", STR, (BACK, TRICEPS, CHEST), ADV, 3, 4, None, 150, 10.0, 10, ("pull-up bar",)),
    # ── Advanced: legs ───────────────────────────────────────────
    _ex("jump_squat", "Jump Squat", HIIT, (LEGS, GLUTES, CARDIO), ADV, 4, 15, None, 60, 11.0, 7),
    _ex("romanian_deadlift", "Romanian Deadlift", STR, (GLUTES, LEGS, BACK), ADV, 4, 8, None, 120, 7.5, 7,
        ("barbell",)),
    _ex("kettlebell_swing", "Kettlebell Swing", HIIT, (GLUTES, FULL), ADV, 4, 15, None, 60, 12.0, 7,
        ("kettlebell",)),
    _ex("barbell_back_squat", "Barbell Back Squat", STR, (LEGS, GLUTES, CORE), ADV, 4, 6, None, 150, 8.0, 8,
        ("barbell", "rack")),
    _ex("pistol_squat", "Pistol Squat", STR, (LEGS, GLUTES), ADV, 4, 6, None, 90, 8.0, 9),
    _ex("nordic_curl", "Nordic Hamstring Curl", STR, (LEGS,), ADV, 3, 5, None, 120, 6.5, 9),
    # ── Advanced: core ───────────────────────────────────────────
    _ex("hanging_leg_raise", "Hanging Leg Raise", STR, (CORE,), ADV, 4, 10, None, 60, 6.5, 7, ("pull-up bar",)),
    _ex("ab_wheel_rollout", "Ab Wheel Rollout", STR, (CORE,), ADV, 4, 10, None, 60, 7.0, 8, ("ab wheel",)),
    _ex("l_sit", "L-Sit", STR, (CORE,), ADV, 4, None, 20, 60, 6.0, 8, ("parallettes",)),
    _ex("dragon_flag", "Dragon Flag", STR, (CORE,), ADV, 3, 6, None, 90, 7.0, 10, ("bench",)),
    # ── Advanced: conditioning ───────────────────────────────────
    _ex("tuck_jump", "Tuck Jump", HIIT, (FULL, CARDIO), ADV, 4, 10, None, 60, 12.0, 8),
    _ex("sprint_interval", "Sprint Interval", CAR, (CARDIO, LEGS), ADV, 6, None, 30, 60, 14.0, 8),
    _ex("burpee_pull_up", "Burpee Pull-Up", HIIT, (FULL, BACK), ADV, 4, 8, None, 75, 13.0, 9, ("pull-up bar",)),
)


def builtin_catalog() -> dict[str, ExerciseDefinition]:
    """Built-in entries keyed by id, in catalog order."""
    return {exercise.id: exercise for exercise in BUILTIN_EXERCISES}
