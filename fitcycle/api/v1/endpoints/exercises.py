"""
Exercise catalog endpoints.
"""

from fastapi import APIRouter, Depends, status

from fitcycle.api.dependencies import get_exercise_service
from fitcycle.schemas.workout import CatalogStats, ExerciseCreate, ExerciseDefinition, ExerciseUpdate
from fitcycle.services.exercise_service import ExerciseService

router = APIRouter()


@router.get(
    "",
    summary="List catalog exercises.",
    response_model=list[ExerciseDefinition],
)
def list_exercises(include_inactive: bool = False, service: ExerciseService = Depends(get_exercise_service)):
    return service.list_exercises(include_inactive)


@router.get(
    "/stats",
    summary="Catalog counts by difficulty, type and muscle group.",
    response_model=CatalogStats,
)
def get_stats(service: ExerciseService = Depends(get_exercise_service)):
    return service.stats()


@router.get(
    "/{exercise_id}",
    summary="Get one exercise.",
    response_model=ExerciseDefinition,
)
def get_exercise(exercise_id: str, service: ExerciseService = Depends(get_exercise_service)):
    return service.get_exercise(exercise_id)


@router.post(
    "",
    summary="Create a custom exercise.",
    response_model=ExerciseDefinition,
    status_code=status.HTTP_201_CREATED,
)
def create_exercise(data: ExerciseCreate, service: ExerciseService = Depends(get_exercise_service)):
    return service.create_exercise(data)


@router.patch(
    "/{exercise_id}",
    summary="Update an exercise (built-ins are overridden, never edited).",
    response_model=ExerciseDefinition,
)
def update_exercise(exercise_id: str, data: ExerciseUpdate,
                    service: ExerciseService = Depends(get_exercise_service)):
    return service.update_exercise(exercise_id, data)


@router.post(
    "/{exercise_id}/deactivate",
    summary="Hide an exercise from selection.",
    response_model=ExerciseDefinition,
)
def deactivate_exercise(exercise_id: str, service: ExerciseService = Depends(get_exercise_service)):
    return service.set_active(exercise_id, False)


@router.post(
    "/{exercise_id}/reactivate",
    summary="Return a deactivated exercise to selection.",
    response_model=ExerciseDefinition,
)
def reactivate_exercise(exercise_id: str, service: ExerciseService = Depends(get_exercise_service)):
    return service.set_active(exercise_id, True)


@router.delete(
    "/{exercise_id}",
    summary="Delete a custom exercise.",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_exercise(exercise_id: str, service: ExerciseService = Depends(get_exercise_service)):
    service.delete_exercise(exercise_id)
