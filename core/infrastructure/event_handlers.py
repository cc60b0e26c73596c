"""
Event handlers for domain events.

These handlers process domain events for side effects
like audit logging and business metrics.
"""

import logging

from core.domain.events import DomainEvent, EventHandler
from core.metrics import (
    csv_import_rows_total,
    expiry_notifications_total,
    license_status_transitions_total,
    licenses_created_total,
    payment_records_total,
)
from licenses.domain.events import (
    LicenseCreated,
    LicenseDeleted,
    LicenseImportRejected,
    LicensesImported,
    LicenseStatusChanged,
    PaymentRecorded,
)
from notifications.domain.events import ExpiryNotificationDispatched

logger = logging.getLogger(__name__)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes every domain event to the structured application log.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra=event.to_dict(),
        )


class MetricsEventHandler(EventHandler):
    """Event handler that turns domain events into Prometheus counters."""

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, LicenseCreated):
            licenses_created_total.labels(source="manual").inc()
        elif isinstance(event, LicensesImported):
            licenses_created_total.labels(source="import").inc(event.row_count)
            csv_import_rows_total.labels(outcome="imported").inc(event.row_count)
        elif isinstance(event, LicenseImportRejected):
            csv_import_rows_total.labels(outcome="rejected").inc(event.row_count)
        elif isinstance(event, LicenseStatusChanged):
            license_status_transitions_total.labels(new_status=event.new_status).inc()
        elif isinstance(event, PaymentRecorded):
            source = "automatic" if event.automatic else "manual"
            payment_records_total.labels(source=source).inc()
        elif isinstance(event, ExpiryNotificationDispatched):
            expiry_notifications_total.labels(
                urgency=event.urgency or "NONE", outcome=event.status
            ).inc()


# Register event handlers
def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    audit_handler = AuditLogEventHandler()
    metrics_handler = MetricsEventHandler()

    for event_type in (
        LicenseCreated,
        LicenseDeleted,
        LicensesImported,
        LicenseImportRejected,
        LicenseStatusChanged,
        PaymentRecorded,
        ExpiryNotificationDispatched,
    ):
        event_bus.subscribe(event_type, audit_handler)
        if event_type is not LicenseDeleted:
            event_bus.subscribe(event_type, metrics_handler)

    logger.info("Event handlers registered")
