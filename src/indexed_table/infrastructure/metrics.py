"""Prometheus metrics for the indexed table service."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all indexed table metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Table operation metrics
        self.operations_total = Counter(
            "table_operations_total",
            "Total number of table operations",
            ["operation", "status"],  # insert, delete, ...; success, error
            registry=self._registry,
        )

        self.records = Gauge(
            "table_records",
            "Number of live records in the table",
            registry=self._registry,
        )

        self.indexes = Gauge(
            "table_indexes",
            "Number of indexed columns",
            registry=self._registry,
        )

        # Query metrics
        self.select_latency_seconds = Histogram(
            "table_select_latency_seconds",
            "Select latency in seconds",
            ["plan"],  # indexed, scan
            buckets=(0.00001, 0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
            registry=self._registry,
        )

        self.select_rows = Histogram(
            "table_select_rows",
            "Number of records returned per select",
            buckets=(0, 1, 10, 100, 1000, 10000, 100000),
            registry=self._registry,
        )

        # Index metrics
        self.index_lookups_total = Counter(
            "table_index_lookups_total",
            "Total equality lookups answered by an index",
            ["column"],
            registry=self._registry,
        )

        self.index_scans_total = Counter(
            "table_index_scans_total",
            "Total range scans answered by an index",
            ["column"],
            registry=self._registry,
        )

        self.index_build_seconds = Histogram(
            "table_index_build_seconds",
            "Time spent building an index",
            buckets=(0.0001, 0.001, 0.01, 0.1, 0.5, 1.0, 5.0),
            registry=self._registry,
        )

        # Persistence metrics
        self.file_rows_total = Counter(
            "table_file_rows_total",
            "Total rows read from or written to table files",
            ["direction"],  # read, write
            registry=self._registry,
        )

        # Server info
        self.info = Info(
            "indexed_table",
            "Indexed table service information",
            registry=self._registry,
        )


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from indexed_table import __version__
    _metrics.info.info({
        "version": __version__,
    })

    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
