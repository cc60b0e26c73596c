"""
App configuration for core.
"""
import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class CoreConfig(AppConfig):
    """Sets up tracing and domain event handlers once apps are loaded."""

    name = "core"
    verbose_name = "Core"

    def ready(self):
        from core.infrastructure.event_handlers import register_event_handlers
        from core.instrumentation import setup_opentelemetry

        setup_opentelemetry()
        register_event_handlers()
