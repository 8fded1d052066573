"""taskgate OpenTelemetry integration.

Emits one span per condition evaluation. Without an SDK TracerProvider
configured by the host application the API tracer is a no-op.
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace

TRACER_NAME = "taskgate"


def get_tracer(name: str = TRACER_NAME) -> Any:
    """Get the OTel tracer for taskgate spans."""
    return trace.get_tracer(name)
