"""Lookups into the salon, staff and service catalog tables"""

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from ..models import Employee, Salon, ServiceVariant


class SalonRepository:
    """Tenant settings lookups"""

    @staticmethod
    def get(db: Session, salon_id: UUID) -> Optional[Salon]:
        return db.query(Salon).filter(Salon.id == salon_id).first()


class EmployeeRepository:
    """Staff directory lookups"""

    @staticmethod
    def get(db: Session, employee_id: UUID) -> Optional[Employee]:
        return db.query(Employee).filter(Employee.id == employee_id).first()

    @staticmethod
    def get_in_salon(db: Session, employee_id: UUID, salon_id: UUID) -> Optional[Employee]:
        return (
            db.query(Employee)
            .filter(Employee.id == employee_id, Employee.salon_id == salon_id)
            .first()
        )

    @staticmethod
    def lock_for_booking(db: Session, employee_id: UUID) -> Optional[Employee]:
        """
        Load the employee row with FOR UPDATE.

        Held until the surrounding transaction ends, so concurrent bookings for
        the same employee run their conflict check one at a time.
        """
        return (
            db.query(Employee)
            .filter(Employee.id == employee_id)
            .with_for_update()
            .first()
        )


class ServiceVariantRepository:
    """Service catalog lookups"""

    @staticmethod
    def get_in_salon(db: Session, variant_id: UUID, salon_id: UUID) -> Optional[ServiceVariant]:
        return (
            db.query(ServiceVariant)
            .filter(ServiceVariant.id == variant_id, ServiceVariant.salon_id == salon_id)
            .first()
        )
