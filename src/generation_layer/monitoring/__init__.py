"""Monitoring and metrics instrumentation for the AI Generation Layer.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from generation_layer.monitoring.metrics import (
    generation_exhausted_total,
    generation_requests_total,
    llm_attempts_total,
    llm_latency_seconds,
    llm_tokens_total,
    model_fallbacks_total,
    parse_fallbacks_total,
)

__all__ = [
    "llm_attempts_total",
    "model_fallbacks_total",
    "generation_exhausted_total",
    "parse_fallbacks_total",
    "generation_requests_total",
    "llm_latency_seconds",
    "llm_tokens_total",
]
