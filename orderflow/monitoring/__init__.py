"""
Monitoring for orderflow: structured logging and metrics.
"""

from orderflow.monitoring.logging import (
    OrderContextFilter,
    OrderJsonFormatter,
    OrderLogger,
    setup_order_logging,
)
from orderflow.monitoring.metrics import OrderMetrics

__all__ = [
    "OrderContextFilter",
    "OrderJsonFormatter",
    "OrderLogger",
    "OrderMetrics",
    "setup_order_logging",
]
