"""
Pydantic schemas for appointment requests and responses
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Dict, List, Optional
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from salon_scheduler.models import AppointmentSource, AppointmentStatus


# ============================================================================
# Request Schemas
# ============================================================================

class AppointmentCreate(BaseModel):
    """Book a new appointment"""
    client_id: UUID
    employee_id: UUID
    variant_id: UUID
    start_at: datetime = Field(..., description="Start instant with UTC offset")
    source: AppointmentSource = AppointmentSource.DIRECT
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("start_at")
    @classmethod
    def require_timezone(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("start_at must include a UTC offset")
        return v


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus
    reason: Optional[str] = Field(None, max_length=500, description="Stored when cancelling")


class AppointmentReschedule(BaseModel):
    start_at: datetime

    @field_validator("start_at")
    @classmethod
    def require_timezone(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("start_at must include a UTC offset")
        return v


# ============================================================================
# Response Schemas
# ============================================================================

class AppointmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    salon_id: UUID
    client_id: UUID
    employee_id: UUID
    variant_id: UUID
    start_at: datetime
    end_at: datetime
    status: AppointmentStatus
    source: AppointmentSource
    final_price: Optional[Decimal] = None
    commission_value: Optional[Decimal] = None
    notes: Optional[str] = None
    cancellation_reason: Optional[str] = None


class WeekAppointmentsResponse(BaseModel):
    week_start: date
    days: Dict[date, List[AppointmentResponse]]


class AvailableSlotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    start: datetime
    end: datetime
    duration_minutes: int
