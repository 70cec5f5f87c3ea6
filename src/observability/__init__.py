"""
Observability module for auction tracing and metrics.

Provides OpenTelemetry spans and Prometheus counters for the auction engine.
"""

from .tracing import (
    setup_tracing,
    create_span,
    get_tracer,
    shutdown_tracing,
)

__all__ = [
    'setup_tracing',
    'create_span',
    'get_tracer',
    'shutdown_tracing',
]
