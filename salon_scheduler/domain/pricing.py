"""Marketplace commission rules."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from salon_scheduler.models.appointment import AppointmentSource

COMMISSION_RATE = Decimal("0.15")
CENT = Decimal("0.01")


def marketplace_commission(price: Decimal) -> Decimal:
    return (Decimal(price) * COMMISSION_RATE).quantize(CENT, rounding=ROUND_HALF_UP)


def commission_for(source: AppointmentSource, price: Optional[Decimal]) -> Optional[Decimal]:
    """Commission owed for a booking; only marketplace bookings carry one."""
    if source != AppointmentSource.MARKETPLACE or price is None:
        return None
    return marketplace_commission(price)
