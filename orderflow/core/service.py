"""
OrderService - the order orchestrator.

Owns the in-memory order ledger and coordinates the inventory, payment and
notification capabilities. A create_order call goes through:

    validate -> check stock -> reduce stock -> charge
        paid:   store order, send confirmation
        unpaid: put stock back (compensation), raise PaymentFailedError

Removing an order also puts its stock back. Updating an order's quantity
does not touch the inventory.

The service is synchronous and keeps no locks; callers that share one
instance across threads must serialize access themselves.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from orderflow.capabilities.interfaces import (
    InventoryService,
    NotificationService,
    PaymentService,
)
from orderflow.core.config import OrderServiceConfig, get_config
from orderflow.core.exceptions import (
    InsufficientStockError,
    InvalidOrderInputError,
    OrderError,
    PaymentFailedError,
)
from orderflow.core.listeners import OrderListener
from orderflow.core.logger import get_logger
from orderflow.core.types import CompensationReason, Order, OrderIdStrategy

logger = get_logger(__name__)


class OrderService:
    """
    Coordinates inventory, payment and notification for single-item orders.

    Args:
        inventory: Stock capability
        payment: Payment capability
        notification: Confirmation capability
        config: Service configuration (defaults to the global config)
        listeners: Lifecycle listeners (defaults to the config's listeners)

    Example:
        >>> service = OrderService(InMemoryInventory({"Phone": 5}),
        ...                        InMemoryPayment(), InMemoryNotifier())
        >>> order = service.create_order("Phone", 2)
        >>> order.id, order.is_paid
        (1, True)
    """

    def __init__(
        self,
        inventory: InventoryService,
        payment: PaymentService,
        notification: NotificationService,
        config: OrderServiceConfig | None = None,
        listeners: list[OrderListener] | None = None,
    ) -> None:
        self._inventory = inventory
        self._payment = payment
        self._notification = notification
        self._config = config or get_config()
        self._listeners = list(listeners) if listeners is not None else list(self._config.listeners)
        self._orders: list[Order] = []
        self._last_id = 0

    @property
    def config(self) -> OrderServiceConfig:
        return self._config

    # ==========================================================================
    # Create
    # ==========================================================================

    def create_order(self, product: str, quantity: int) -> Order:
        """
        Place an order for quantity units of product.

        Returns:
            The stored, paid order

        Raises:
            InvalidOrderInputError: product empty or quantity not positive
            InsufficientStockError: inventory cannot cover the quantity
            PaymentFailedError: the charge was declined; stock has been put back
        """
        self._validate_input(product, quantity)

        if not self._inventory.check_stock(product, quantity):
            raise self._rejected(InsufficientStockError(product, quantity))

        order = Order(id=self._next_order_id(), product=product, quantity=quantity)

        self._process_order(order)
        self._finalize_order(order)

        return order

    def _validate_input(self, product: Any, quantity: Any) -> None:
        if not product or not isinstance(product, str):
            msg = "Product name required."
            raise self._rejected(InvalidOrderInputError(msg, product=product, quantity=quantity))
        if not _is_positive_int(quantity):
            msg = "Quantity must be positive."
            raise self._rejected(InvalidOrderInputError(msg, product=product, quantity=quantity))

    def _rejected(self, error: OrderError) -> OrderError:
        """Report a create_order rejection to listeners; returns error for raising."""
        self._emit("on_order_rejected", error.product, error.quantity, error)
        return error

    def _next_order_id(self) -> int:
        if self._config.id_strategy is OrderIdStrategy.COLLECTION_SIZE:
            return len(self._orders) + 1
        return self._last_id + 1

    def _process_order(self, order: Order) -> None:
        self._inventory.reduce_stock(order.product, order.quantity)

        try:
            order.is_paid = bool(self._payment.process_payment(order))
        except Exception as exc:
            logger.exception(f"Payment capability raised for order {order.id}")
            self._compensate(order.product, order.quantity, CompensationReason.PAYMENT_FAILED)
            error = PaymentFailedError(order.product, order.quantity, order.id)
            raise self._rejected(error) from exc

    def _finalize_order(self, order: Order) -> None:
        if not order.is_paid:
            self._compensate(order.product, order.quantity, CompensationReason.PAYMENT_FAILED)
            raise self._rejected(PaymentFailedError(order.product, order.quantity, order.id))

        self._orders.append(order)
        self._last_id = max(self._last_id, order.id)
        logger.debug(f"Order {order.id} stored ({order.quantity} x {order.product})")
        self._emit("on_order_created", order)

        self._send_confirmation(order)

    def _send_confirmation(self, order: Order) -> None:
        # Fire-and-forget: the order is already committed at this point
        try:
            self._notification.send_confirmation(order)
        except Exception as exc:
            logger.exception(f"Confirmation could not be sent for order {order.id}")
            self._emit("on_notification_failed", order, exc)

    def _compensate(self, product: str, quantity: int, reason: CompensationReason) -> None:
        logger.debug(f"Returning {quantity} x {product} to stock ({reason.value})")
        self._emit("on_compensation_started", product, quantity, reason)
        self._inventory.increase_stock(product, quantity)
        self._emit("on_compensation", product, quantity, reason)

    # ==========================================================================
    # Update / Remove / Query
    # ==========================================================================

    def update_order(self, order_id: int, new_quantity: int) -> bool:
        """
        Change the quantity of a stored order.

        Stock is not adjusted for the difference.

        Returns:
            True if the order was found and updated, False if it does not
            exist or new_quantity is not positive
        """
        order = self._find(order_id)
        if order is None:
            return False

        if not _is_positive_int(new_quantity):
            return False

        previous_quantity = order.quantity
        order.quantity = new_quantity
        self._emit("on_order_updated", order, previous_quantity)
        return True

    def remove_order(self, order_id: int) -> bool:
        """
        Remove a stored order and put its current quantity back in stock.

        Returns:
            True if removed, False if not found
        """
        order = self._find(order_id)
        if order is None:
            return False

        self._compensate(order.product, order.quantity, CompensationReason.ORDER_REMOVED)
        self._orders.remove(order)
        self._emit("on_order_removed", order)
        return True

    def get_orders(self) -> list[Order]:
        """
        Orders in insertion order.

        With share_order_references (the default) the list holds the live
        Order objects, so they reflect later updates. Otherwise each order is
        a copy. The list itself is always new.
        """
        if self._config.share_order_references:
            return list(self._orders)
        return [replace(order) for order in self._orders]

    def get_order(self, order_id: int) -> Order | None:
        """First stored order with the given id, or None."""
        order = self._find(order_id)
        if order is None or self._config.share_order_references:
            return order
        return replace(order)

    def _find(self, order_id: int) -> Order | None:
        return next((o for o in self._orders if o.id == order_id), None)

    def __len__(self) -> int:
        return len(self._orders)

    # ==========================================================================
    # Listeners
    # ==========================================================================

    def add_listener(self, listener: OrderListener) -> None:
        self._listeners.append(listener)

    def _emit(self, hook: str, *args: Any) -> None:
        for listener in self._listeners:
            try:
                getattr(listener, hook)(*args)
            except Exception:
                # Observers never change the outcome of an order operation
                logger.exception(f"Listener {type(listener).__name__}.{hook} failed")


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
