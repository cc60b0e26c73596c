"""
Shared building blocks for the license tracker apps.

Domain exceptions and value objects, the in-process event bus,
access token and observability middleware, Prometheus metrics,
health endpoints and scheduled tasks.
"""
