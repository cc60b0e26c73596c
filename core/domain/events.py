"""
Domain event base classes.

License and notification modules publish events after their state
changes; audit logging and metrics subscribe to them.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class DomainEvent(ABC):
    """
    Immutable record of something that happened to a license or an owner.

    ``aggregate_id`` is the license id for per-license events and the
    owner id for bulk events such as imports.
    """

    def __init__(self, aggregate_id: str, occurred_at: Optional[datetime] = None):
        self.event_id = uuid.uuid4()
        self.occurred_at = occurred_at or datetime.now(timezone.utc)
        self.aggregate_id = aggregate_id

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> Dict[str, Any]:
        """Flat representation used as structured log fields."""
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "event_type": self.event_type,
        }


class EventHandler(ABC):
    """Subscriber run by the event bus for each matching event."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        ...


class EventBus(ABC):
    """Publish/subscribe port for domain events."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Deliver an event to every handler subscribed to its type.

        Handler failures must not propagate to the publisher.
        """

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """Register a handler for one event type."""
