"""Health checks and monitoring endpoints"""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from salon_scheduler.config.database import get_db

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get("")
def health_check():
    """Basic health check"""
    return {"status": "healthy", "service": "salon-scheduler"}


@health_router.get("/detailed")
def detailed_health_check(db: Session = Depends(get_db)):
    """Health check including the database"""
    checks = {
        "api": "healthy",
        "database": "unknown",
    }

    try:
        db.execute(text("SELECT 1"))
        checks["database"] = "healthy"
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        checks["database"] = f"unhealthy: {str(e)}"

    checks["overall"] = "healthy" if checks["database"] == "healthy" else "degraded"
    return checks
