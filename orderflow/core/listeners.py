"""
Order lifecycle listeners.

Listeners observe what the order service does without taking part in it:
every hook is called after the corresponding step has happened. The base
class implements every hook as a no-op so subclasses only override what
they need.

Usage:
    >>> from orderflow import OrderService
    >>> from orderflow.core.listeners import LoggingOrderListener, MetricsOrderListener
    >>>
    >>> service = OrderService(
    ...     inventory, payment, notifier,
    ...     listeners=[LoggingOrderListener(), MetricsOrderListener()],
    ... )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from orderflow.core.exceptions import (
    InsufficientStockError,
    InvalidOrderInputError,
    PaymentFailedError,
)
from orderflow.core.types import CompensationReason, Order, OrderOutcome

if TYPE_CHECKING:
    from orderflow.monitoring.logging import OrderLogger


class OrderListener:
    """Base listener with no-op hooks."""

    def on_order_created(self, order: Order) -> None:
        pass

    def on_order_rejected(self, product: Any, quantity: Any, error: Exception) -> None:
        pass

    def on_compensation_started(
        self, product: str, quantity: int, reason: CompensationReason
    ) -> None:
        pass

    def on_compensation(
        self, product: str, quantity: int, reason: CompensationReason
    ) -> None:
        pass

    def on_order_updated(self, order: Order, previous_quantity: int) -> None:
        pass

    def on_order_removed(self, order: Order) -> None:
        pass

    def on_notification_failed(self, order: Order, error: Exception) -> None:
        pass


class LoggingOrderListener(OrderListener):
    """Writes every lifecycle event through an OrderLogger."""

    def __init__(self, logger: OrderLogger | None = None):
        from orderflow.monitoring.logging import OrderLogger

        self.log = logger or OrderLogger("orderflow.orders")

    def on_order_created(self, order: Order) -> None:
        self.log.order_created(order)

    def on_order_rejected(self, product: Any, quantity: Any, error: Exception) -> None:
        self.log.order_rejected(product, quantity, error)

    def on_compensation_started(
        self, product: str, quantity: int, reason: CompensationReason
    ) -> None:
        self.log.compensation_started(product, quantity, reason)

    def on_compensation(
        self, product: str, quantity: int, reason: CompensationReason
    ) -> None:
        self.log.compensation_completed(product, quantity, reason)

    def on_order_updated(self, order: Order, previous_quantity: int) -> None:
        self.log.order_updated(order, previous_quantity)

    def on_order_removed(self, order: Order) -> None:
        self.log.order_removed(order)

    def on_notification_failed(self, order: Order, error: Exception) -> None:
        self.log.notification_failed(order, error)


class MetricsOrderListener(OrderListener):
    """
    Feeds lifecycle events into a metrics collector.

    Works with OrderMetrics (default) or PrometheusMetrics. The open orders
    gauge counts the orders of the services this listener is attached to;
    OrderServiceConfig(metrics=True) gives every service its own listener.
    """

    _OUTCOMES = (
        (InvalidOrderInputError, OrderOutcome.INVALID_INPUT),
        (InsufficientStockError, OrderOutcome.INSUFFICIENT_STOCK),
        (PaymentFailedError, OrderOutcome.PAYMENT_FAILED),
    )

    def __init__(self, metrics: Any = None):
        if metrics is None:
            from orderflow.monitoring.metrics import OrderMetrics

            metrics = OrderMetrics()
        self.metrics = metrics
        self._open_orders = 0

    def on_order_created(self, order: Order) -> None:
        self.metrics.record_outcome(OrderOutcome.CREATED, order.product)
        self._open_orders += 1
        self.metrics.set_open_orders(self._open_orders)

    def on_order_rejected(self, product: Any, quantity: Any, error: Exception) -> None:
        outcome = next(
            (outcome for kind, outcome in self._OUTCOMES if isinstance(error, kind)),
            None,
        )
        if outcome is None:
            return
        self.metrics.record_outcome(outcome, product if isinstance(product, str) else None)

    def on_compensation(
        self, product: str, quantity: int, reason: CompensationReason
    ) -> None:
        self.metrics.record_compensation(product, quantity, reason)

    def on_order_removed(self, order: Order) -> None:
        self._open_orders = max(self._open_orders - 1, 0)
        self.metrics.set_open_orders(self._open_orders)


def default_listeners() -> list[OrderListener]:
    """Listeners used when nothing else is configured."""
    return [LoggingOrderListener()]
