"""
Celery application factory.
"""

from celery import Celery
from celery.signals import setup_logging as celery_setup_logging

from telemetry_gate.core.config import settings
from telemetry_gate.core.logging import setup_logging

celery_app = Celery("telemetry_gate", include=["telemetry_gate.tasks.gate_tasks"])
celery_app.config_from_object("celeryconfig")


@celery_setup_logging.connect
def _configure_worker_logging(**kwargs) -> None:
    """Route worker logs through structlog instead of Celery's own handlers."""
    setup_logging(settings.log_level, json_output=settings.LOG_JSON)
