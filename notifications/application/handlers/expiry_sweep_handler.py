"""
Expiry notification sweep.

Finds every license expiring within the horizon that has a notification
email, classifies it with the notification boundaries and sends one
reminder per license. Sends run concurrently; a failed send is recorded
for that license and never affects the others.
"""
import asyncio
import logging
import time
from datetime import timedelta

from django.utils import timezone

from core.infrastructure.events import event_bus
from core.metrics import expiry_sweep_duration_seconds
from licenses.domain.expiry import DEFAULT_NOTIFICATION_BOUNDARIES, ExpiryBoundaries, classify
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository
from notifications.application.commands.run_expiry_sweep import RunExpirySweepCommand
from notifications.application.dto.sweep_dto import (
    FAILED,
    SENT,
    SKIPPED,
    ExpirySweepResultDTO,
    NotificationOutcomeDTO,
)
from notifications.domain.events import ExpiryNotificationDispatched
from notifications.domain.messages import build_expiry_email
from notifications.ports.email_sender import EmailSender

logger = logging.getLogger(__name__)

DEFAULT_HORIZON_DAYS = 30


class ExpirySweepHandler:
    """Handler for RunExpirySweepCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        email_sender: EmailSender,
        boundaries: ExpiryBoundaries = DEFAULT_NOTIFICATION_BOUNDARIES,
        horizon_days: int = DEFAULT_HORIZON_DAYS,
    ):
        """
        Initialize handler.

        Args:
            license_repository: Repository for the cross-owner expiry query
            email_sender: Outbound email provider
            boundaries: Notification boundary set
            horizon_days: Days ahead of today to look for expiring licenses
        """
        self.license_repository = license_repository
        self.email_sender = email_sender
        self.boundaries = boundaries
        self.horizon_days = horizon_days

    async def _notify(
        self, license: License, days_until_expiry: int, urgency: str, dry_run: bool
    ) -> NotificationOutcomeDTO:
        outcome = NotificationOutcomeDTO(
            license_id=license.id,
            email=license.notification_email,
            days_until_expiry=days_until_expiry,
            urgency=urgency,
            status=SKIPPED,
        )
        if dry_run:
            return outcome

        message = build_expiry_email(
            product_name=license.product_name,
            vendor_name=license.vendor_name,
            expiry_date=license.expiry_date,
            days_until_expiry=days_until_expiry,
            urgency=urgency,
        )
        try:
            outcome.email_id = await self.email_sender.send(
                license.notification_email, message.subject, message.html
            )
            outcome.status = SENT
            logger.info(
                "Expiry email sent for license %s to %s", license.id, license.notification_email
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            outcome.status = FAILED
            outcome.error = str(e)
            logger.error(
                "Failed to send expiry email for license %s: %s",
                license.id,
                e,
                extra={"license_id": str(license.id), "urgency": urgency},
            )

        await event_bus.publish(
            ExpiryNotificationDispatched(
                license_id=license.id,
                email=license.notification_email,
                urgency=urgency,
                status=outcome.status,
            )
        )
        return outcome

    async def handle(self, command: RunExpirySweepCommand) -> ExpirySweepResultDTO:
        """
        Handle run expiry sweep command.

        Args:
            command: RunExpirySweepCommand

        Returns:
            ExpirySweepResultDTO; success is False only if the license query failed
        """
        today = command.today or timezone.localdate()
        start_time = time.time()

        try:
            licenses = await self.license_repository.find_expiring_with_notification_email(
                today, today + timedelta(days=self.horizon_days)
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Expiry sweep query failed: %s", e, exc_info=True)
            return ExpirySweepResultDTO(success=False, error=str(e), dry_run=command.dry_run)

        logger.info("Found %d licenses to check", len(licenses))

        pending = []
        for license in licenses:
            if not (license.notification_email or "").strip():
                continue
            classification = classify(license.expiry_date, today, self.boundaries)
            if classification.is_expired or classification.tier is None:
                continue
            pending.append(
                self._notify(
                    license,
                    classification.days_until_expiry,
                    classification.tier,
                    command.dry_run,
                )
            )

        outcomes = list(await asyncio.gather(*pending))
        expiry_sweep_duration_seconds.observe(time.time() - start_time)

        result = ExpirySweepResultDTO(
            success=True,
            checked_licenses=len(licenses),
            details=outcomes,
            dry_run=command.dry_run,
        )
        logger.info(
            "Expiry sweep finished: %d sent, %d failed",
            result.notifications_sent,
            result.notifications_failed,
            extra={"checked_licenses": result.checked_licenses, "dry_run": command.dry_run},
        )
        return result
