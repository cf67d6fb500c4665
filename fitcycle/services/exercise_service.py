"""Exercise catalog service."""

from fastapi import HTTPException, status
from pydantic import ValidationError

from fitcycle.catalog.repository import CUSTOM_PREFIX, InMemoryExerciseRepository
from fitcycle.schemas.workout import CatalogStats, ExerciseCreate, ExerciseDefinition, ExerciseUpdate


class ExerciseService:
    """Service for reading and curating the exercise catalog."""

    def __init__(self, repository: InMemoryExerciseRepository):
        self.repository = repository

    def list_exercises(self, include_inactive: bool = False) -> list[ExerciseDefinition]:
        return self.repository.list_exercises(include_inactive=include_inactive)

    def get_exercise(self, exercise_id: str) -> ExerciseDefinition:
        exercise = self.repository.get(exercise_id)
        if exercise is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown exercise: '{exercise_id}'", )
        return exercise

    def stats(self) -> CatalogStats:
        return self.repository.stats()

    def create_exercise(self, data: ExerciseCreate) -> ExerciseDefinition:
        return self.repository.create(data)

    def update_exercise(self, exercise_id: str, data: ExerciseUpdate) -> ExerciseDefinition:
        try:
            exercise = self.repository.update(exercise_id, data)
        except ValidationError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e), )
        if exercise is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown exercise: '{exercise_id}'", )
        return exercise

    def set_active(self, exercise_id: str, active: bool) -> ExerciseDefinition:
        self.get_exercise(exercise_id)
        if active:
            self.repository.reactivate(exercise_id)
        else:
            self.repository.deactivate(exercise_id)
        return self.get_exercise(exercise_id)

    def delete_exercise(self, exercise_id: str) -> None:
        self.get_exercise(exercise_id)
        if not exercise_id.startswith(CUSTOM_PREFIX):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                                detail="Built-in exercises can only be deactivated", )
        self.repository.delete(exercise_id)
