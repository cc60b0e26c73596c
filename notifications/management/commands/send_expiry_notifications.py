"""
Django management command to run the expiry notification sweep.

This command should be run periodically (e.g., via cron or scheduled task).
"""

import json
import logging

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from notifications.application.commands.run_expiry_sweep import RunExpirySweepCommand
from notifications.infrastructure.factory import build_expiry_sweep_handler

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to email reminders for licenses nearing expiry."""

    help = "Send expiry reminder emails for licenses expiring soon"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - classify licenses but don't send emails",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        dry_run = options["dry_run"]
        handler = build_expiry_sweep_handler()
        result = async_to_sync(handler.handle)(RunExpirySweepCommand(dry_run=dry_run))

        if not result.success:
            raise CommandError(f"Expiry sweep failed: {result.error}")

        if dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No emails will be sent"))
            for outcome in result.details:
                self.stdout.write(
                    f"  - License {outcome.license_id} -> {outcome.email} "
                    f"({outcome.urgency}, {outcome.days_until_expiry} days)"
                )

        self.stdout.write(json.dumps(result.to_dict(), indent=2))
        # pylint: disable=no-member
        self.stdout.write(
            self.style.SUCCESS(
                f"Checked {result.checked_licenses} license(s): "
                f"{result.notifications_sent} sent, {result.notifications_failed} failed"
            )
        )
