"""
Exercise repository.

The built-in catalog is never mutated.  Everything an operator can change
is held beside it, keyed by exercise id:

- ``custom``       entries created at runtime (ids prefixed ``custom_``),
- ``overrides``    per-field patches for built-in entries,
- ``deactivated``  soft-deleted ids, hidden from normal reads.

Reads assemble the effective catalog with :func:`apply_override`, a pure
merge, so the same built-in tuple can back any number of repositories.
"""

from __future__ import annotations

import logging
import math
import threading
import uuid
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from fitcycle.catalog.exercise_catalog import BUILTIN_EXERCISES
from fitcycle.schemas.workout import (CatalogStats, DifficultyLevel, ExerciseCreate, ExerciseDefinition, ExerciseType,
                                      ExerciseUpdate, MuscleGroup, )

logger = logging.getLogger(__name__)

CUSTOM_PREFIX = "custom_"

_TIER_BASE_SCORE = {
    DifficultyLevel.BEGINNER: 1.0,
    DifficultyLevel.INTERMEDIATE: 5.0,
    DifficultyLevel.ADVANCED: 8.0,
}


def apply_override(exercise: ExerciseDefinition, override: dict[str, Any]) -> ExerciseDefinition:
    """Return *exercise* with the fields in *override* replaced.

    The result is validated as a whole; *exercise* is left untouched.
    """
    if not override:
        return exercise
    return ExerciseDefinition.model_validate({**exercise.model_dump(), **override})


def derive_difficulty_score(payload: ExerciseCreate) -> int:
    """Ranking score for an entry created without one."""
    score = _TIER_BASE_SCORE[payload.difficulty]
    if payload.type is ExerciseType.HIIT:
        score += 1
    if payload.type is ExerciseType.STRENGTH:
        score += 0.5
    if payload.base_sets >= 4:
        score += 1
    if payload.base_reps is not None and payload.base_reps >= 15:
        score += 1
    return min(10, max(1, math.floor(score + 0.5)))


class ExerciseRepository(ABC):
    """Read access to the effective exercise catalog."""

    @abstractmethod
    def list_exercises(self, include_inactive: bool = False) -> list[ExerciseDefinition]:
        ...

    @abstractmethod
    def get(self, exercise_id: str) -> Optional[ExerciseDefinition]:
        ...


class InMemoryExerciseRepository(ExerciseRepository):
    """Process-local repository over an immutable base catalog."""

    def __init__(self, base: Optional[Iterable[ExerciseDefinition]] = None):
        source = BUILTIN_EXERCISES if base is None else base
        self._base: dict[str, ExerciseDefinition] = {exercise.id: exercise for exercise in source}
        self._custom: dict[str, ExerciseDefinition] = {}
        self._overrides: dict[str, dict[str, Any]] = {}
        self._deactivated: set[str] = set()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_exercises(self, include_inactive: bool = False) -> list[ExerciseDefinition]:
        """Effective catalog: built-ins (overrides applied) then custom entries."""
        with self._lock:
            result = []
            for exercise_id in [*self._base, *self._custom]:
                exercise = self._effective(exercise_id)
                if exercise.is_active or include_inactive:
                    result.append(exercise)
            return result

    def get(self, exercise_id: str) -> Optional[ExerciseDefinition]:
        with self._lock:
            if exercise_id not in self._base and exercise_id not in self._custom:
                return None
            return self._effective(exercise_id)

    def stats(self) -> CatalogStats:
        with self._lock:
            everything = self.list_exercises(include_inactive=True)
            active = [e for e in everything if e.is_active]

            by_difficulty = {level: 0 for level in DifficultyLevel}
            by_type = {kind: 0 for kind in ExerciseType}
            by_muscle = {muscle: 0 for muscle in MuscleGroup}
            for exercise in active:
                by_difficulty[exercise.difficulty] += 1
                by_type[exercise.type] += 1
                for muscle in exercise.muscle_groups:
                    by_muscle[muscle] += 1

            return CatalogStats(total=len(everything), active=len(active), inactive=len(everything) - len(active),
                                custom_count=len(self._custom), by_difficulty=by_difficulty, by_type=by_type,
                                by_muscle_group=by_muscle, )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, payload: ExerciseCreate) -> ExerciseDefinition:
        data = payload.model_dump()
        if data["difficulty_score"] is None:
            data["difficulty_score"] = derive_difficulty_score(payload)
        exercise = ExerciseDefinition(id=f"{CUSTOM_PREFIX}{uuid.uuid4().hex[:12]}", is_custom=True, **data)
        with self._lock:
            self._custom[exercise.id] = exercise
        logger.info("Created custom exercise %s (%s)", exercise.id, exercise.name)
        return exercise

    def update(self, exercise_id: str, payload: ExerciseUpdate) -> Optional[ExerciseDefinition]:
        """Patch an entry.  Returns ``None`` for an unknown id.

        Custom entries are replaced; built-ins accumulate an override.
        Raises ``pydantic.ValidationError`` if the merged entry is invalid,
        in which case nothing is stored.
        """
        changes = payload.model_dump(exclude_unset=True)
        with self._lock:
            if exercise_id in self._custom:
                updated = apply_override(self._custom[exercise_id], changes)
                self._custom[exercise_id] = updated
            elif exercise_id in self._base:
                merged = {**self._overrides.get(exercise_id, {}), **changes}
                apply_override(self._base[exercise_id], merged)
                self._overrides[exercise_id] = merged
            else:
                return None
            return self._effective(exercise_id)

    def deactivate(self, exercise_id: str) -> bool:
        with self._lock:
            if exercise_id not in self._base and exercise_id not in self._custom:
                return False
            self._deactivated.add(exercise_id)
            return True

    def reactivate(self, exercise_id: str) -> bool:
        with self._lock:
            if exercise_id not in self._deactivated:
                return False
            self._deactivated.discard(exercise_id)
            return True

    def delete(self, exercise_id: str) -> bool:
        """Permanently remove a custom entry.  Built-ins can only be deactivated."""
        with self._lock:
            if not exercise_id.startswith(CUSTOM_PREFIX) or exercise_id not in self._custom:
                logger.warning("Refusing to delete %s: not a custom exercise", exercise_id)
                return False
            del self._custom[exercise_id]
            self._deactivated.discard(exercise_id)
            return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _effective(self, exercise_id: str) -> ExerciseDefinition:
        if exercise_id in self._custom:
            exercise = self._custom[exercise_id]
        else:
            exercise = apply_override(self._base[exercise_id], self._overrides.get(exercise_id, {}))
        if exercise_id in self._deactivated:
            exercise = exercise.model_copy(update={"is_active": False})
        return exercise
