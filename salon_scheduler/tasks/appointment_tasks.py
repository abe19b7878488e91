# ===== salon_scheduler/tasks/appointment_tasks.py =====
from datetime import datetime, timezone
from typing import Optional
from salon_scheduler.config.celery_config import celery_app
from salon_scheduler.config.database import get_db
from salon_scheduler.services.appointment.auto_completion import AutoCompletionJob
import logging

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=3)
def auto_complete_appointments(self, as_of: Optional[str] = None):
    """Close out past appointments; ``as_of`` is an ISO instant, defaults to now"""
    cutoff = datetime.fromisoformat(as_of) if as_of else datetime.now(timezone.utc)
    if cutoff.tzinfo is None:
        cutoff = cutoff.replace(tzinfo=timezone.utc)

    db_gen = get_db()
    db = next(db_gen)
    try:
        summary = AutoCompletionJob(db).run(cutoff)
        return {"status": "success", "as_of": cutoff.isoformat(), **summary}

    except Exception as exc:
        logger.error(f"Auto-completion sweep failed: {exc}")
        raise self.retry(exc=exc, countdown=60 * (self.request.retries + 1))

    finally:
        db_gen.close()
