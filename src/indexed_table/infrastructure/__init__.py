"""Infrastructure layer - cross-cutting concerns."""

from indexed_table.infrastructure.config import Config, get_config
from indexed_table.infrastructure.logging import (
    get_logger,
    setup_logging,
    setup_logging_from_config,
)
from indexed_table.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from indexed_table.infrastructure.tracing import get_tracer, setup_tracing, trace_span

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "trace_span",
]
