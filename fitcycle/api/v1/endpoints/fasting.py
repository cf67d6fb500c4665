"""
Fasting plan, live status, and daily cycle endpoints.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from fitcycle.api.dependencies import get_fasting_service
from fitcycle.engine.personalization import StartingPlan, recommend_starting_plan
from fitcycle.schemas.fasting import (CustomWindowUpdate, CycleAction, CycleTransitionResponse, FastingCycle,
                                      FastingState, FastingStats, FastingWindow, PhaseStatus, PlanUpdate, ProtocolInfo,
                                      SyncResponse, )
from fitcycle.schemas.workout import WorkType
from fitcycle.services.fasting_service import FastingService

router = APIRouter()


@router.get(
    "/protocols",
    summary="List the available fasting protocols.",
    response_model=list[ProtocolInfo],
)
def list_protocols():
    return FastingService.list_protocols()


@router.get(
    "/recommendation",
    summary="Starting protocol and workout difficulty for a work type and weight.",
    response_model=StartingPlan,
)
def get_recommendation(
    work_type: WorkType,
    weight_kg: float = Query(..., gt=0),
):
    return recommend_starting_plan(work_type, weight_kg)


# ----------------------------------------------------------------------
# Plan & window
# ----------------------------------------------------------------------


@router.get(
    "/{user_id}/window",
    summary="Current fasting window.",
    response_model=FastingWindow,
)
def get_window(user_id: str, service: FastingService = Depends(get_fasting_service)):
    return service.get_window(user_id)


@router.get(
    "/{user_id}/status",
    summary="Live phase status (poll at most every 60 s).",
    response_model=PhaseStatus,
)
def get_status(
    user_id: str,
    as_of: Optional[datetime.datetime] = Query(None, description="Evaluate at this instant instead of now"),
    service: FastingService = Depends(get_fasting_service),
):
    return service.get_status(user_id, as_of)


@router.put(
    "/{user_id}/plan",
    summary="Select a fasting protocol (rejected with 409 mid-fast).",
    response_model=FastingWindow,
)
def set_plan(user_id: str, data: PlanUpdate, service: FastingService = Depends(get_fasting_service)):
    return service.set_plan(user_id, data)


@router.put(
    "/{user_id}/custom-window",
    summary="Override the protocol window (rejected with 409 mid-fast).",
    response_model=FastingWindow,
)
def set_custom_window(user_id: str, data: CustomWindowUpdate,
                      service: FastingService = Depends(get_fasting_service)):
    return service.set_custom_window(user_id, data)


# ----------------------------------------------------------------------
# Cycle
# ----------------------------------------------------------------------


@router.get(
    "/{user_id}/cycle",
    summary="Today's cycle.",
    response_model=Optional[FastingCycle],
)
def get_cycle(user_id: str, service: FastingService = Depends(get_fasting_service)):
    return service.get_cycle(user_id)


@router.post(
    "/{user_id}/cycle/{action}",
    summary="Apply a cycle action; a no-op on a finished cycle returns applied=false.",
    response_model=CycleTransitionResponse,
)
def apply_cycle_action(user_id: str, action: CycleAction, service: FastingService = Depends(get_fasting_service)):
    return service.apply_action(user_id, action)


@router.post(
    "/{user_id}/sync",
    summary="Apply automatic phase-boundary transitions and return the live status.",
    response_model=SyncResponse,
)
def sync(user_id: str, service: FastingService = Depends(get_fasting_service)):
    return service.sync(user_id)


@router.post(
    "/{user_id}/reset",
    summary="Discard all cycles and history, keeping the selected plan.",
    response_model=FastingState,
)
def reset(user_id: str, service: FastingService = Depends(get_fasting_service)):
    return service.reset(user_id)


# ----------------------------------------------------------------------
# History
# ----------------------------------------------------------------------


@router.get(
    "/{user_id}/history",
    summary="Archived cycles in a date range (default: the last 30 days).",
    response_model=list[FastingCycle],
)
def get_history(
    user_id: str,
    start: Optional[datetime.date] = None,
    end: Optional[datetime.date] = None,
    service: FastingService = Depends(get_fasting_service),
):
    return service.history(user_id, start, end)


@router.get(
    "/{user_id}/history/{date}",
    summary="The cycle recorded for one date.",
    response_model=FastingCycle,
)
def get_cycle_for_date(user_id: str, date: datetime.date, service: FastingService = Depends(get_fasting_service)):
    return service.get_cycle_for_date(user_id, date)


@router.get(
    "/{user_id}/stats",
    summary="Streak, weekly compliance and plan-change guard.",
    response_model=FastingStats,
)
def get_stats(user_id: str, service: FastingService = Depends(get_fasting_service)):
    return service.stats(user_id)
