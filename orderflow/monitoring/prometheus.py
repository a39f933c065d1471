# ============================================
# FILE: orderflow/monitoring/prometheus.py
# ============================================

"""
Prometheus metrics integration for orderflow.

Quick Start:
    >>> from orderflow.monitoring.prometheus import PrometheusMetrics, start_metrics_server
    >>>
    >>> start_metrics_server(port=8000)
    >>> metrics = PrometheusMetrics()
    >>>
    >>> from orderflow.core.listeners import MetricsOrderListener
    >>> service = OrderService(inventory, payment, notifier,
    ...                        listeners=[MetricsOrderListener(metrics=metrics)])
"""

import logging

from prometheus_client import Counter, Gauge, start_http_server

from orderflow.core.types import CompensationReason, OrderOutcome

logger = logging.getLogger(__name__)


class PrometheusMetrics:
    """
    Prometheus-compatible metrics collector for orderflow.

    Exposes the following metrics:
        - <prefix>_orders_total: Counter of create_order calls by outcome
        - <prefix>_compensations_total: Counter of stock compensations by reason
        - <prefix>_compensated_units_total: Counter of units returned, by product
        - <prefix>_open_orders: Gauge of orders currently in the ledger

    Same recording interface as OrderMetrics, so either one can back a
    MetricsOrderListener.
    """

    def __init__(self, prefix: str = "orderflow"):
        """
        Initialize Prometheus metrics.

        Args:
            prefix: Metric name prefix (default: "orderflow")
        """
        self._prefix = prefix

        self._orders_total = Counter(
            f"{prefix}_orders_total",
            "Total order creation attempts",
            ["outcome"],
        )

        self._compensations_total = Counter(
            f"{prefix}_compensations_total",
            "Total stock compensations performed",
            ["reason"],
        )

        self._compensated_units = Counter(
            f"{prefix}_compensated_units_total",
            "Units of stock returned to the inventory",
            ["product"],
        )

        self._open_orders = Gauge(
            f"{prefix}_open_orders",
            "Number of orders currently held in the ledger",
        )

    def record_outcome(self, outcome: OrderOutcome, product: str | None = None) -> None:
        """Record the result of a create_order call."""
        outcome_str = outcome.value if hasattr(outcome, "value") else str(outcome)
        self._orders_total.labels(outcome=outcome_str).inc()

    def record_compensation(
        self, product: str, quantity: int, reason: CompensationReason
    ) -> None:
        """Record stock handed back to the inventory."""
        reason_str = reason.value if hasattr(reason, "value") else str(reason)
        self._compensations_total.labels(reason=reason_str).inc()
        self._compensated_units.labels(product=product).inc(quantity)

    def set_open_orders(self, count: int) -> None:
        self._open_orders.set(count)


def start_metrics_server(port: int = 8000, addr: str = "0.0.0.0") -> None:
    """
    Start a Prometheus HTTP metrics server.

    Args:
        port: Port to listen on (default: 8000)
        addr: Address to bind to (default: 0.0.0.0 for all interfaces)
    """
    start_http_server(port, addr)
    logger.info(f"Prometheus metrics server started on port {port}")
