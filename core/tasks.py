"""
Celery tasks for background processing.

The expiry notification sweep is scheduled externally (celery beat or
any scheduler that can enqueue a task).
"""
import logging

from asgiref.sync import async_to_sync

from LicenseTracker.celery import app
from notifications.application.commands.run_expiry_sweep import RunExpirySweepCommand
from notifications.infrastructure.factory import build_expiry_sweep_handler

logger = logging.getLogger(__name__)


@app.task
def send_expiry_notifications_task(dry_run: bool = False) -> dict:
    """
    Celery task for the expiry notification sweep.

    Args:
        dry_run: Classify and report without sending emails

    Returns:
        Sweep summary as a dictionary
    """
    handler = build_expiry_sweep_handler()
    result = async_to_sync(handler.handle)(RunExpirySweepCommand(dry_run=dry_run))
    logger.info(
        "Expiry sweep task finished",
        extra={
            "success": result.success,
            "checked_licenses": result.checked_licenses,
            "notifications_sent": result.notifications_sent,
            "notifications_failed": result.notifications_failed,
        },
    )
    return result.to_dict()
