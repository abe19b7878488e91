# ============================================================================
# FILE: salon_scheduler/api/v1/employees.py
# Availability and schedule endpoints per employee
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path, status, Response
from datetime import date
from typing import List
from uuid import UUID

from salon_scheduler.api.dependencies import get_availability_service, get_salon_id, get_schedule_service
from salon_scheduler.schemas import (
    AvailableSlotResponse,
    ScheduleExceptionCreate,
    ScheduleExceptionResponse,
    WeeklyScheduleResponse,
    WeeklyScheduleUpdate,
)
from salon_scheduler.services.availability.availability_service import AvailabilityService
from salon_scheduler.services.schedule.schedule_service import DaySchedule, ScheduleService

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("/{employee_id}/availability", response_model=List[AvailableSlotResponse])
def get_available_slots(
        employee_id: UUID = Path(...),
        day: date = Query(..., description="Salon-local day"),
        duration_minutes: int = Query(..., ge=1, le=720),
        salon_id: UUID = Depends(get_salon_id),
        service: AvailabilityService = Depends(get_availability_service)
):
    """Bookable start times on a 15-minute grid, in the salon's timezone"""
    return service.available_slots(salon_id, employee_id, day, duration_minutes)


# ============================================================================
# Weekly schedule
# ============================================================================

@router.get("/{employee_id}/schedule", response_model=WeeklyScheduleResponse)
def get_weekly_schedule(
        employee_id: UUID = Path(...),
        salon_id: UUID = Depends(get_salon_id),
        service: ScheduleService = Depends(get_schedule_service)
):
    days = service.get_weekly_schedule(salon_id, employee_id)
    return {"employee_id": employee_id, "days": days}


@router.put("/{employee_id}/schedule", response_model=WeeklyScheduleResponse)
def replace_weekly_schedule(
        payload: WeeklyScheduleUpdate,
        employee_id: UUID = Path(...),
        salon_id: UUID = Depends(get_salon_id),
        service: ScheduleService = Depends(get_schedule_service)
):
    days = service.replace_weekly_schedule(
        salon_id,
        employee_id,
        [DaySchedule(**day.model_dump()) for day in payload.days],
    )
    return {"employee_id": employee_id, "days": days}


# ============================================================================
# Schedule exceptions
# ============================================================================

@router.post(
    "/{employee_id}/schedule-exceptions",
    response_model=ScheduleExceptionResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_schedule_exception(
        payload: ScheduleExceptionCreate,
        employee_id: UUID = Path(...),
        salon_id: UUID = Depends(get_salon_id),
        service: ScheduleService = Depends(get_schedule_service)
):
    return service.add_schedule_exception(
        salon_id,
        employee_id,
        payload.start_at,
        payload.end_at,
        payload.type,
        reason=payload.reason,
    )


@router.get("/{employee_id}/schedule-exceptions", response_model=List[ScheduleExceptionResponse])
def list_schedule_exceptions(
        employee_id: UUID = Path(...),
        date_from: date = Query(...),
        date_to: date = Query(...),
        salon_id: UUID = Depends(get_salon_id),
        service: ScheduleService = Depends(get_schedule_service)
):
    return service.list_schedule_exceptions(salon_id, employee_id, date_from, date_to)


@router.delete("/{employee_id}/schedule-exceptions/{exception_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_schedule_exception(
        employee_id: UUID = Path(...),
        exception_id: UUID = Path(...),
        salon_id: UUID = Depends(get_salon_id),
        service: ScheduleService = Depends(get_schedule_service)
):
    service.delete_schedule_exception(salon_id, employee_id, exception_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
