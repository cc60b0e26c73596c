"""
Unit tests for the expiry notification sweep.
"""
import uuid
from dataclasses import replace
from datetime import timedelta

import pytest

from fakes import InMemoryLicenseRepository, RecordingEmailSender
from notifications.application.commands.run_expiry_sweep import RunExpirySweepCommand
from notifications.application.dto.sweep_dto import FAILED, SENT, SKIPPED
from notifications.application.handlers.expiry_sweep_handler import ExpirySweepHandler
from notifications.domain.events import ExpiryNotificationDispatched


def _license(sample_license, today, days, email="it@example.com", **overrides):
    return replace(
        sample_license,
        id=uuid.uuid4(),
        expiry_date=today + timedelta(days=days),
        notification_email=email,
        **overrides,
    )


@pytest.mark.asyncio
class TestExpirySweepHandler:
    """Tests for ExpirySweepHandler."""

    async def test_urgency_tiers(self, sample_license, today, published_events):
        repository = InMemoryLicenseRepository(
            [
                _license(sample_license, today, 0, product_name="Today"),
                _license(sample_license, today, 2, product_name="Soon"),
                _license(sample_license, today, 7),
                _license(sample_license, today, 15),
                _license(sample_license, today, 30),
                _license(sample_license, today, 31),
                _license(sample_license, today, -1),
            ]
        )
        sender = RecordingEmailSender()

        result = await ExpirySweepHandler(repository, sender).handle(
            RunExpirySweepCommand(today=today)
        )

        assert result.success is True
        assert result.checked_licenses == 5
        assert [(item.days_until_expiry, item.urgency) for item in result.details] == [
            (0, "URGENT"),
            (2, "URGENT"),
            (7, "HIGH"),
            (15, "MEDIUM"),
            (30, "LOW"),
        ]
        assert result.notifications_sent == 5
        assert result.notifications_failed == 0
        assert sender.sent[1]["subject"] == "License Expiry Alert: Soon - 2 days remaining"
        assert len(published_events) == 5
        assert all(isinstance(event, ExpiryNotificationDispatched) for event in published_events)

    async def test_failure_is_isolated(self, sample_license, today):
        repository = InMemoryLicenseRepository(
            [
                _license(sample_license, today, 5, email="ok@example.com"),
                _license(sample_license, today, 6, email="broken@example.com"),
            ]
        )
        sender = RecordingEmailSender(failing_recipients=["broken@example.com"])

        result = await ExpirySweepHandler(repository, sender).handle(
            RunExpirySweepCommand(today=today)
        )

        assert result.success is True
        assert result.notifications_sent == 1
        assert result.notifications_failed == 1
        sent, failed = result.details
        assert sent.status == SENT
        assert sent.email_id == "msg-1"
        assert failed.status == FAILED
        assert "broken@example.com" in failed.error

        summary = result.to_dict()
        assert "error" not in summary["details"][0]
        assert "email_id" not in summary["details"][1]
        assert summary["details"][1]["error"] == failed.error

    async def test_blank_email_is_checked_but_not_sent(self, sample_license, today):
        repository = InMemoryLicenseRepository([_license(sample_license, today, 3, email="  ")])
        sender = RecordingEmailSender()

        result = await ExpirySweepHandler(repository, sender).handle(
            RunExpirySweepCommand(today=today)
        )

        assert result.checked_licenses == 1
        assert result.details == []
        assert sender.sent == []

    async def test_licenses_without_email_are_not_queried(self, sample_license, today):
        repository = InMemoryLicenseRepository([_license(sample_license, today, 3, email=None)])

        result = await ExpirySweepHandler(repository, RecordingEmailSender()).handle(
            RunExpirySweepCommand(today=today)
        )

        assert result.checked_licenses == 0

    async def test_query_failure(self, today):
        repository = InMemoryLicenseRepository()
        repository.fail_expiry_query = True

        result = await ExpirySweepHandler(repository, RecordingEmailSender()).handle(
            RunExpirySweepCommand(today=today)
        )

        assert result.success is False
        assert result.to_dict() == {"success": False, "error": "database unavailable"}

    async def test_dry_run_sends_nothing(self, sample_license, today, published_events):
        repository = InMemoryLicenseRepository([_license(sample_license, today, 10)])
        sender = RecordingEmailSender()

        result = await ExpirySweepHandler(repository, sender).handle(
            RunExpirySweepCommand(today=today, dry_run=True)
        )

        assert sender.sent == []
        assert published_events == []
        assert result.details[0].status == SKIPPED
        assert result.details[0].urgency == "MEDIUM"
        summary = result.to_dict()
        assert summary["dry_run"] is True
        assert summary["notifications_sent"] == 0

    async def test_longer_horizon_skips_untiered(self, sample_license, today):
        repository = InMemoryLicenseRepository([_license(sample_license, today, 45)])
        sender = RecordingEmailSender()

        result = await ExpirySweepHandler(repository, sender, horizon_days=60).handle(
            RunExpirySweepCommand(today=today)
        )

        assert result.checked_licenses == 1
        assert result.details == []
