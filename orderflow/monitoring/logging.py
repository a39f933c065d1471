"""
Structured logging for order processing

Provides structured logging utilities for the order lifecycle, with the
order being worked on propagated to every log record through a context
variable.
"""

import json
import logging
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

from orderflow.core.types import CompensationReason, Order

# Context variables for propagating order context
order_context: ContextVar[dict[str, Any]] = ContextVar("order_context", default={})


class OrderJsonFormatter(logging.Formatter):
    """
    JSON formatter for order logs with structured fields
    """

    # Fields to extract from log record if present
    _EXTRA_FIELDS = (
        "order_id",
        "product",
        "quantity",
        "operation",
        "outcome",
        "reason",
        "previous_quantity",
        "error_type",
    )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON"""
        log_entry = self._build_base_entry(record)
        self._add_order_context(log_entry)
        self._add_record_extras(log_entry, record)
        return json.dumps(log_entry)

    def _build_base_entry(self, record: logging.LogRecord) -> dict[str, Any]:
        return {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

    def _add_order_context(self, log_entry: dict[str, Any]) -> None:
        context = order_context.get({})
        if context:
            log_entry.update(
                {
                    "order_id": context.get("order_id"),
                    "product": context.get("product"),
                    "operation": context.get("operation"),
                }
            )

    def _add_record_extras(self, log_entry: dict[str, Any], record: logging.LogRecord) -> None:
        for field in self._EXTRA_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)


class OrderContextFilter(logging.Filter):
    """
    Logging filter that adds order context to log records
    """

    def filter(self, record: logging.LogRecord) -> bool:
        context = order_context.get({})

        # Explicit extras win over the ambient context
        if not hasattr(record, "order_id"):
            record.order_id = context.get("order_id", "-")
        if not hasattr(record, "product"):
            record.product = context.get("product", "")
        if not hasattr(record, "operation"):
            record.operation = context.get("operation", "")

        return True


class OrderLogger:
    """
    Order-aware logger with automatic context propagation
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        # Loggers are process-wide; one context filter per logger
        if not any(isinstance(f, OrderContextFilter) for f in self.logger.filters):
            self.logger.addFilter(OrderContextFilter())

    def set_order_context(
        self, operation: str, product: str | None = None, order_id: int | None = None
    ) -> None:
        """Set order context for current execution"""
        order_context.set({"operation": operation, "product": product, "order_id": order_id})

    def clear_order_context(self) -> None:
        order_context.set({})

    def order_created(self, order: Order) -> None:
        """Log a committed, paid order"""
        self.set_order_context("create", order.product, order.id)
        self.logger.info(
            f"Order created: #{order.id} {order.quantity} x {order.product}",
            extra={
                "order_id": order.id,
                "product": order.product,
                "quantity": order.quantity,
                "outcome": "created",
            },
        )

    def order_rejected(self, product: Any, quantity: Any, error: Exception) -> None:
        """Log a create_order call that ended in an error"""
        self.set_order_context("create", product if isinstance(product, str) else None)
        self.logger.warning(
            f"Order rejected: {quantity} x {product!r} - {error!s}",
            extra={
                "product": product,
                "quantity": quantity,
                "error_type": type(error).__name__,
            },
        )

    def compensation_started(
        self, product: str, quantity: int, reason: CompensationReason
    ) -> None:
        self.logger.warning(
            f"Compensation started: returning {quantity} x {product} ({reason.value})",
            extra={"product": product, "quantity": quantity, "reason": reason.value},
        )

    def compensation_completed(
        self, product: str, quantity: int, reason: CompensationReason
    ) -> None:
        self.logger.warning(
            f"Compensation completed: {quantity} x {product} back in stock",
            extra={"product": product, "quantity": quantity, "reason": reason.value},
        )

    def order_updated(self, order: Order, previous_quantity: int) -> None:
        self.set_order_context("update", order.product, order.id)
        self.logger.info(
            f"Order updated: #{order.id} quantity {previous_quantity} -> {order.quantity}",
            extra={
                "order_id": order.id,
                "quantity": order.quantity,
                "previous_quantity": previous_quantity,
            },
        )

    def order_removed(self, order: Order) -> None:
        self.set_order_context("remove", order.product, order.id)
        self.logger.info(
            f"Order removed: #{order.id}",
            extra={"order_id": order.id, "quantity": order.quantity},
        )

    def notification_failed(self, order: Order, error: Exception) -> None:
        """Log a confirmation that could not be delivered"""
        self.logger.error(
            f"Confirmation FAILED for order #{order.id} - {error!s}",
            extra={"order_id": order.id, "error_type": type(error).__name__},
        )


def setup_order_logging(
    log_level: str = "INFO", json_format: bool = True, include_console: bool = True
) -> OrderLogger:
    """
    Set up structured logging for order processing

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_format: Use JSON formatting for structured logs
        include_console: Include console handler

    Returns:
        Configured OrderLogger instance
    """
    root_logger = logging.getLogger("orderflow")
    root_logger.setLevel(getattr(logging, log_level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if include_console:
        console_handler = logging.StreamHandler()

        if json_format:
            console_handler.setFormatter(OrderJsonFormatter())
        else:
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - [%(operation)s:%(order_id)s] - %(message)s"
            )
            console_handler.setFormatter(formatter)
            console_handler.addFilter(OrderContextFilter())

        root_logger.addHandler(console_handler)

    return OrderLogger("orderflow.orders")
