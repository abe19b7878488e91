# salon_scheduler/config/celery_config.py
"""Celery configuration, task routing and periodic schedule"""
from datetime import timedelta

from celery import Celery
from kombu import Queue

from salon_scheduler.config.settings import get_settings

settings = get_settings()


def create_celery_app() -> Celery:
    """Create and configure Celery application"""

    celery_app = Celery(
        "salon_scheduler",
        broker=settings.CELERY_BROKER_URL,
        backend=settings.CELERY_RESULT_BACKEND,
        include=["salon_scheduler.tasks.appointment_tasks"],
    )

    celery_app.conf.update(
        task_serializer=settings.CELERY_TASK_SERIALIZER,
        accept_content=["json"],
        result_serializer="json",
        timezone="UTC",
        enable_utc=True,

        # Task routing
        task_routes={
            "salon_scheduler.tasks.appointment_tasks.*": {"queue": "appointments"},
        },
        task_queues=(
            Queue("appointments", routing_key="appointments"),
        ),

        # Periodic jobs (run `celery beat` alongside the worker)
        beat_schedule={
            "auto-complete-appointments": {
                "task": "salon_scheduler.tasks.appointment_tasks.auto_complete_appointments",
                "schedule": timedelta(minutes=settings.AUTO_COMPLETE_INTERVAL_MINUTES),
            },
        },

        # Worker settings
        worker_max_tasks_per_child=1000,
        worker_prefetch_multiplier=1,
        task_acks_late=True,

        broker_connection_retry_on_startup=True,
    )

    return celery_app


celery_app = create_celery_app()
