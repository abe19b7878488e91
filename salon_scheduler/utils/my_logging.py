# salon_scheduler/utils/my_logging.py
"""Logging configuration"""
import logging
import sys
from salon_scheduler.config.settings import get_settings

NOISY_LOGGERS = [
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "alembic",
    "celery",
    "kombu",
    "amqp",
    "httpx",
    "uvicorn.access",
]


def setup_logging(verbose=True):
    """Configure application logging; quiet mode keeps only warnings and third-party errors"""
    settings = get_settings()

    if verbose:
        level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    if not verbose:
        for name in NOISY_LOGGERS:
            logger = logging.getLogger(name)
            logger.setLevel(logging.ERROR)
            logger.propagate = False
