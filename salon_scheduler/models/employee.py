# salon_scheduler/models/employee.py
from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid, Enum as SQLEnum
from sqlalchemy.sql import func
import uuid
import enum
from salon_scheduler.models.base import Base


class EmployeeStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    DELETED = "DELETED"


class Employee(Base):
    """Staff member who can be booked"""
    __tablename__ = "employees"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    salon_id = Column(Uuid, ForeignKey("salons.id"), nullable=False, index=True)

    display_name = Column(String(200), nullable=False)
    status = Column(SQLEnum(EmployeeStatus, name="employee_status"), nullable=False, default=EmployeeStatus.ACTIVE)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def is_bookable(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE

    def __repr__(self):
        return f"<Employee(id={self.id}, name={self.display_name}, salon_id={self.salon_id})>"
