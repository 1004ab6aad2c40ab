"""Registro de métricas via structured logging.

As métricas são emitidas como logs estruturados e agregadas fora do
processo (Cloud Logging, BigQuery, etc.).

Métricas suportadas:
- Latência: acknowledgement de interações e chamadas ao upstream
- Rate limit: 429 recebidos por bucket (com flag global)
- Follow-up: resultado de cada follow-up (sent|expired|failed)

Uso:
    from app.observability.metrics import record_latency

    start = time.perf_counter()
    # ... operação ...
    record_latency("interactions", "acknowledge", (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging

from app.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "interactions", "forwarding")
        operation: Nome da operação (ex: "acknowledge", "upstream_send")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (usa o do contexto se None)
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "histogram",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id or get_correlation_id(),
        },
    )


def record_rate_limited(
    bucket: str,
    retry_after: float,
    is_global: bool,
    attempt: int,
) -> None:
    """Registra um 429 recebido do upstream."""
    logger.warning(
        "metric_rate_limited",
        extra={
            "metric_type": "counter",
            "bucket": bucket,
            "retry_after": retry_after,
            "is_global": is_global,
            "attempt": attempt,
            "correlation_id": get_correlation_id(),
        },
    )


def record_followup(outcome: str, interaction_id: str) -> None:
    """Registra o resultado de um follow-up (sent|expired|failed)."""
    logger.info(
        "metric_followup",
        extra={
            "metric_type": "counter",
            "outcome": outcome,
            "interaction_id": interaction_id,
            "correlation_id": get_correlation_id(),
        },
    )
