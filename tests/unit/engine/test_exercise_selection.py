"""
Tests for daily exercise selection.

Synthetic catalogs pin down the greedy pass and its fallbacks; the
built-in catalog checks the end-to-end shape of a generated day.
"""

import logging

import pytest

from fitcycle.catalog.exercise_catalog import BUILTIN_EXERCISES
from fitcycle.core.exceptions import EmptyCatalogSelection
from fitcycle.engine.exercise_selection import (can_proceed_to_next, derive_difficulty, exercise_sequence,
                                                focus_muscles, generate_daily_workout, missing_before,
                                                recommend_exercises, select_cooldown_exercises,
                                                select_main_exercises, select_warmup_exercises, total_calories,
                                                total_duration_minutes, )
from fitcycle.schemas.workout import (ActivityLevel, DifficultyLevel, ExerciseDefinition, ExerciseType, Goal,
                                      MuscleGroup, SelectedExercise, UserAttributes, )

BEG = DifficultyLevel.BEGINNER
INT = DifficultyLevel.INTERMEDIATE
ADV = DifficultyLevel.ADVANCED
CHEST = MuscleGroup.CHEST


def _ex(exercise_id, muscles=(CHEST,), difficulty=BEG, kind=ExerciseType.STRENGTH, score=3, calories=5.0,
        active=True, reps=10, duration=None) -> ExerciseDefinition:
    return ExerciseDefinition(id=exercise_id, name=exercise_id.title(), type=kind, muscle_groups=tuple(muscles),
                              difficulty=difficulty, base_sets=3, base_reps=reps, base_duration=duration,
                              base_rest_time=60, calories_per_minute=calories, difficulty_score=score,
                              is_active=active)


def _ids(exercises):
    return [e.id for e in exercises]


# ======================================================================
# Main selection
# ======================================================================


class TestSelectMainExercises:
    def test_variety_then_relaxed(self):
        catalog = [_ex("c1", score=1), _ex("c2", score=2), _ex("c3", score=3), _ex("c4", score=4),
                   _ex("cardio", kind=ExerciseType.CARDIO, score=5)]
        selected = select_main_exercises(catalog, [CHEST], BEG, 4)
        assert _ids(selected) == ["c1", "c2", "cardio", "c3"]

    def test_sorted_by_difficulty_score(self):
        catalog = [_ex("hard", muscles=(MuscleGroup.BACK, CHEST), score=6),
                   _ex("easy", muscles=(MuscleGroup.CORE, CHEST), score=1)]
        assert _ids(select_main_exercises(catalog, [CHEST], BEG, 2)) == ["easy", "hard"]

    def test_difficulty_fallback(self, caplog):
        caplog.set_level(logging.INFO)
        catalog = [_ex("b1", score=2), _ex("b2", muscles=(MuscleGroup.SHOULDERS, CHEST), score=2),
                   _ex("a2", difficulty=ADV, score=9), _ex("a1", difficulty=ADV, score=7),
                   _ex("a3", difficulty=ADV, score=10)]
        selected = select_main_exercises(catalog, [CHEST], BEG, 4)
        assert _ids(selected) == ["b1", "b2", "a1", "a2"]
        assert "Relaxed difficulty filter" in caplog.text

    def test_muscle_group_fallback(self, caplog):
        caplog.set_level(logging.INFO)
        catalog = [_ex("legs1", muscles=(MuscleGroup.LEGS,)), _ex("chest"), _ex("legs2", muscles=(MuscleGroup.LEGS,))]
        selected = select_main_exercises(catalog, [CHEST], BEG, 3)
        assert _ids(selected) == ["chest", "legs1", "legs2"]
        assert "Relaxed muscle group filter" in caplog.text

    def test_short_catalog_returns_everything(self):
        catalog = [_ex("one"), _ex("two", muscles=(MuscleGroup.LEGS,))]
        assert len(select_main_exercises(catalog, [CHEST], BEG, 6)) == 2

    def test_adjacent_tier_slice(self):
        primaries = (MuscleGroup.BACK, MuscleGroup.SHOULDERS, MuscleGroup.BICEPS, MuscleGroup.TRICEPS,
                     MuscleGroup.LEGS, MuscleGroup.CORE)
        beginners = [_ex(f"b{i}", muscles=(m, CHEST)) for i, m in enumerate(primaries, start=1)]
        catalog = [*beginners, _ex("i1", difficulty=INT)]
        selected = select_main_exercises(catalog, [CHEST], INT, 6)
        assert _ids(selected) == ["i1", "b1", "b2", "b3", "b4", "b5"]

    def test_beginner_gets_no_adjacent_tier(self):
        catalog = [_ex("b1"), _ex("i1", muscles=(MuscleGroup.LEGS, CHEST), difficulty=INT, score=1)]
        assert _ids(select_main_exercises(catalog, [CHEST], BEG, 1)) == ["b1"]

    def test_empty_catalog(self):
        with pytest.raises(EmptyCatalogSelection):
            select_main_exercises([], [CHEST], BEG, 6)


# ======================================================================
# Warm-up & cool-down
# ======================================================================


class TestWarmupCooldown:
    def test_warmup_takes_gentle_moves_in_catalog_order(self):
        catalog = [_ex("squat"), _ex("march", kind=ExerciseType.CARDIO, score=1),
                   _ex("sprint", kind=ExerciseType.CARDIO, score=3),
                   _ex("circles", kind=ExerciseType.FLEXIBILITY, score=1),
                   _ex("skip", kind=ExerciseType.CARDIO, difficulty=INT, score=1),
                   _ex("jacks", kind=ExerciseType.CARDIO, score=2), _ex("walk", kind=ExerciseType.CARDIO, score=1)]
        assert _ids(select_warmup_exercises(catalog)) == ["march", "circles", "jacks"]

    def test_warmup_excludes_used(self):
        catalog = [_ex("march", kind=ExerciseType.CARDIO, score=1), _ex("walk", kind=ExerciseType.CARDIO, score=1)]
        assert _ids(select_warmup_exercises(catalog, exclude={"march"})) == ["walk"]

    def test_cooldown_prefers_stretches(self):
        catalog = [_ex("walk", kind=ExerciseType.CARDIO, score=1),
                   _ex("hamstring", kind=ExerciseType.FLEXIBILITY, score=1),
                   _ex("pose", kind=ExerciseType.FLEXIBILITY, score=2),
                   _ex("pigeon", kind=ExerciseType.FLEXIBILITY, score=2)]
        assert _ids(select_cooldown_exercises(catalog)) == ["hamstring", "pose"]

    def test_cooldown_falls_back_to_low_intensity(self):
        catalog = [_ex("stretch", kind=ExerciseType.FLEXIBILITY, score=2),
                   _ex("walk", kind=ExerciseType.CARDIO, score=1), _ex("hold", score=1)]
        assert _ids(select_cooldown_exercises(catalog)) == ["walk", "hold"]


# ======================================================================
# Full day
# ======================================================================


class TestGenerateDailyWorkout:
    def test_default_shape(self):
        workout = generate_daily_workout(UserAttributes(), BUILTIN_EXERCISES)
        assert workout.day_number == 1
        assert workout.difficulty is BEG
        assert workout.focus_area.startswith("Push")
        assert len(workout.main_exercises) == 6
        assert len(workout.warmup_exercises) == 3
        assert len(workout.cooldown_exercises) == 2
        assert workout.total_duration > 0
        assert workout.total_calories > 0
        assert workout.progression_message.startswith("Week 1")

    def test_no_duplicates_across_sections(self):
        for day in range(1, 8):
            workout = generate_daily_workout(UserAttributes(day_number=day), BUILTIN_EXERCISES)
            ids = _ids(e.exercise for e in exercise_sequence(workout))
            assert len(ids) == len(set(ids))

    def test_main_hits_focus_muscles(self):
        workout = generate_daily_workout(UserAttributes(day_number=2, difficulty=INT), BUILTIN_EXERCISES)
        targets = set(focus_muscles(2))
        assert all(targets.intersection(e.exercise.muscle_groups) for e in workout.main_exercises)

    def test_warmup_and_cooldown_are_gentle(self):
        workout = generate_daily_workout(UserAttributes(day_number=3), BUILTIN_EXERCISES)
        for selected in workout.warmup_exercises:
            assert selected.exercise.type in (ExerciseType.CARDIO, ExerciseType.FLEXIBILITY)
            assert selected.exercise.difficulty_score <= 2
        for selected in workout.cooldown_exercises:
            assert selected.adjusted_sets == 1

    def test_options(self):
        workout = generate_daily_workout(UserAttributes(), BUILTIN_EXERCISES, exercise_count=4,
                                         include_warmup=False, include_cooldown=False)
        assert len(workout.main_exercises) == 4
        assert workout.warmup_exercises == []
        assert workout.cooldown_exercises == []

    def test_target_muscles_override_rotation(self):
        workout = generate_daily_workout(UserAttributes(day_number=1), BUILTIN_EXERCISES,
                                         target_muscle_groups=[MuscleGroup.LEGS])
        assert all(MuscleGroup.LEGS in e.exercise.muscle_groups for e in workout.main_exercises)
        assert workout.focus_area.startswith("Push")

    def test_deterministic(self):
        attributes = UserAttributes(day_number=12, activity_level=ActivityLevel.MODERATELY_ACTIVE)
        assert generate_daily_workout(attributes, BUILTIN_EXERCISES) == generate_daily_workout(attributes,
                                                                                                BUILTIN_EXERCISES)

    def test_inactive_only_catalog_raises(self):
        with pytest.raises(EmptyCatalogSelection):
            generate_daily_workout(UserAttributes(), [_ex("gone", active=False)])

    def test_inactive_entries_skipped(self):
        catalog = [_ex("gone", active=False, score=1), _ex("kept")]
        workout = generate_daily_workout(UserAttributes(), catalog, include_warmup=False, include_cooldown=False)
        assert _ids(e.exercise for e in workout.main_exercises) == ["kept"]


class TestDeriveDifficulty:
    @pytest.mark.parametrize(
        "attributes, expected",
        [
            (UserAttributes(difficulty=ADV, activity_level=ActivityLevel.SEDENTARY), ADV),
            (UserAttributes(activity_level=ActivityLevel.SEDENTARY), BEG),
            (UserAttributes(activity_level=ActivityLevel.VERY_ACTIVE, weight_kg=110, height_cm=180), BEG),
            (UserAttributes(activity_level=ActivityLevel.VERY_ACTIVE, weight_kg=70, height_cm=180), ADV),
            (UserAttributes(activity_level=ActivityLevel.VERY_ACTIVE), INT),
            (UserAttributes(activity_level=ActivityLevel.LIGHTLY_ACTIVE), INT),
        ],
    )
    def test_derive(self, attributes, expected):
        assert derive_difficulty(attributes) is expected


# ======================================================================
# Sequencing & totals
# ======================================================================


class TestSequencing:
    @pytest.mark.parametrize(
        "current, completed, expected",
        [
            (0, [], True),
            (2, [0, 1], True),
            (2, [0], False),
            (3, [1, 0, 2], True),
        ],
    )
    def test_can_proceed(self, current, completed, expected):
        assert can_proceed_to_next(current, completed) is expected

    def test_missing_before(self):
        assert missing_before(3, [1]) == [0, 2]

    def test_sequence_reindexes(self):
        workout = generate_daily_workout(UserAttributes(), BUILTIN_EXERCISES)
        sequence = exercise_sequence(workout)
        assert [s.order_index for s in sequence] == list(range(11))
        assert sequence[0].exercise == workout.warmup_exercises[0].exercise
        assert sequence[-1].exercise == workout.cooldown_exercises[-1].exercise


class TestTotals:
    def test_duration_and_calories(self):
        untimed = SelectedExercise(exercise=_ex("a", calories=5.0), adjusted_sets=3, adjusted_reps=10,
                                   adjusted_rest_time=60, order_index=0)
        timed = SelectedExercise(exercise=_ex("b", calories=3.0, reps=None, duration=20), adjusted_sets=1,
                                 adjusted_duration=20, adjusted_rest_time=15, order_index=1)
        # 3 * 30 + 2 * 60 + 20 = 230 s
        assert total_duration_minutes([untimed, timed]) == 4
        assert total_calories([untimed, timed], 4) == 16

    def test_empty(self):
        assert total_duration_minutes([]) == 0
        assert total_calories([], 0) == 0


class TestRecommendExercises:
    def test_weight_loss_favours_calorie_burn(self):
        picks = recommend_exercises(BUILTIN_EXERCISES, Goal.LOSE_WEIGHT, INT)
        assert picks
        assert all(e.type in (ExerciseType.CARDIO, ExerciseType.HIIT) and e.difficulty is INT for e in picks)
        burns = [e.calories_per_minute for e in picks]
        assert burns == sorted(burns, reverse=True)

    def test_flexibility(self):
        picks = recommend_exercises(BUILTIN_EXERCISES, Goal.INCREASE_FLEXIBILITY, BEG, count=3)
        assert len(picks) == 3
        assert all(e.type is ExerciseType.FLEXIBILITY for e in picks)

    def test_inactive_excluded(self):
        catalog = [_ex("gone", active=False, calories=20), _ex("kept")]
        assert _ids(recommend_exercises(catalog, None, BEG)) == ["kept"]
