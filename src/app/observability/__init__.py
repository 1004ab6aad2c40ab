"""Observabilidade: correlation_id e métricas via logs estruturados.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_rate_limited
"""

from app.observability.correlation import (
    bound_correlation_id,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_followup,
    record_latency,
    record_rate_limited,
)

__all__ = [
    "bound_correlation_id",
    "generate_correlation_id",
    "get_correlation_id",
    "record_followup",
    "record_latency",
    "record_rate_limited",
    "reset_correlation_id",
    "set_correlation_id",
]
