"""
API v1 router setup
Every route is tenant-scoped through the X-Salon-Id header
"""
from fastapi import APIRouter

from salon_scheduler.api.v1 import appointments, employees

api_v1_router = APIRouter()

api_v1_router.include_router(appointments.router)
api_v1_router.include_router(employees.router)


@api_v1_router.get("/", tags=["Info"])
def api_info():
    """API information and available endpoints."""
    return {
        "version": "1.0",
        "tenant_header": "X-Salon-Id",
        "resources": ["/appointments", "/employees/{employee_id}"],
    }
