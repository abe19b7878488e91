"""
Pydantic schemas for weekly schedules and schedule exceptions
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Optional
from datetime import datetime, time
from uuid import UUID

from salon_scheduler.models import ScheduleExceptionType


class DayScheduleSchema(BaseModel):
    """One weekday of working hours (0=Monday, 6=Sunday)"""
    model_config = ConfigDict(from_attributes=True)

    day_of_week: int = Field(..., ge=0, le=6)
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    is_working_day: bool = True

    @model_validator(mode="after")
    def require_hours_on_working_days(self):
        if self.is_working_day and (self.start_time is None or self.end_time is None):
            raise ValueError("start_time and end_time are required on a working day")
        return self


class WeeklyScheduleUpdate(BaseModel):
    days: List[DayScheduleSchema] = Field(..., max_length=7)


class WeeklyScheduleResponse(BaseModel):
    employee_id: UUID
    days: List[DayScheduleSchema]


class ScheduleExceptionCreate(BaseModel):
    start_at: datetime
    end_at: datetime
    type: ScheduleExceptionType
    reason: Optional[str] = Field(None, max_length=255)

    @field_validator("start_at", "end_at")
    @classmethod
    def require_timezone(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("datetime must include a UTC offset")
        return v


class ScheduleExceptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    employee_id: UUID
    start_at: datetime
    end_at: datetime
    type: ScheduleExceptionType
    reason: Optional[str] = None
