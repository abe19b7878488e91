# ============================================================================
# FILE: salon_scheduler/api/v1/appointments.py
# Appointment endpoints - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path, status
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional
from uuid import UUID

from salon_scheduler.api.dependencies import get_appointment_service, get_salon_id
from salon_scheduler.config.database import get_db
from salon_scheduler.models import AppointmentStatus
from salon_scheduler.schemas import (
    AppointmentCreate,
    AppointmentReschedule,
    AppointmentResponse,
    AppointmentStatusUpdate,
    WeekAppointmentsResponse,
)
from salon_scheduler.services.appointment.appointment_query_service import AppointmentQueryService
from salon_scheduler.services.appointment.appointment_service import AppointmentService

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(
        payload: AppointmentCreate,
        salon_id: UUID = Depends(get_salon_id),
        service: AppointmentService = Depends(get_appointment_service)
):
    """Book an appointment. 409 when the employee is unavailable or the slot is taken."""
    return service.create(
        salon_id=salon_id,
        client_id=payload.client_id,
        employee_id=payload.employee_id,
        variant_id=payload.variant_id,
        start_at=payload.start_at,
        source=payload.source,
        notes=payload.notes,
    )


@router.get("", response_model=List[AppointmentResponse])
def list_appointments_for_day(
        day: date = Query(..., description="Salon-local day"),
        employee_id: Optional[UUID] = Query(None),
        statuses: Optional[List[AppointmentStatus]] = Query(None, alias="status"),
        salon_id: UUID = Depends(get_salon_id),
        db: Session = Depends(get_db)
):
    return AppointmentQueryService.list_for_day(
        db, salon_id, day, employee_id=employee_id, statuses=statuses
    )


@router.get("/week", response_model=WeekAppointmentsResponse)
def list_appointments_for_week(
        week_start: date = Query(..., description="First salon-local day of the week"),
        salon_id: UUID = Depends(get_salon_id),
        db: Session = Depends(get_db)
):
    days = AppointmentQueryService.list_for_week(db, salon_id, week_start)
    return {"week_start": week_start, "days": days}


@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(
        appointment_id: UUID = Path(..., description="The appointment ID"),
        salon_id: UUID = Depends(get_salon_id),
        db: Session = Depends(get_db)
):
    return AppointmentQueryService.get(db, salon_id, appointment_id)


@router.patch("/{appointment_id}/status", response_model=AppointmentResponse)
def update_appointment_status(
        payload: AppointmentStatusUpdate,
        appointment_id: UUID = Path(...),
        salon_id: UUID = Depends(get_salon_id),
        service: AppointmentService = Depends(get_appointment_service)
):
    """
    Move the appointment through its lifecycle.
    Marketplace bookings cannot be cancelled inside the salon's cancellation window.
    """
    return service.update_status(salon_id, appointment_id, payload.status, reason=payload.reason)


@router.post("/{appointment_id}/reschedule", response_model=AppointmentResponse)
def reschedule_appointment(
        payload: AppointmentReschedule,
        appointment_id: UUID = Path(...),
        salon_id: UUID = Depends(get_salon_id),
        service: AppointmentService = Depends(get_appointment_service)
):
    return service.reschedule(salon_id, appointment_id, payload.start_at)
