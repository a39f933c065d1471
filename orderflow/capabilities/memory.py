"""
In-memory capability implementations

Provides simple in-memory inventory, payment and notification backends for
development, demos and testing. Not suitable for production use as state is
lost on process restart.
"""

from dataclasses import replace

from orderflow.capabilities.interfaces import (
    InventoryService,
    NotificationService,
    PaymentService,
)
from orderflow.core.logger import get_logger
from orderflow.core.types import Order

logger = get_logger(__name__)


class InMemoryInventory(InventoryService):
    """
    In-memory stock store

    Keeps one integer count per product. Unknown products have no stock.
    """

    def __init__(self, stock: dict[str, int] | None = None):
        self._stock: dict[str, int] = dict(stock or {})

    def check_stock(self, product: str, quantity: int) -> bool:
        return self._stock.get(product, 0) >= quantity

    def reduce_stock(self, product: str, quantity: int) -> None:
        if not self.check_stock(product, quantity):
            msg = f"Not enough stock for {product}"
            raise ValueError(msg)
        self._stock[product] -= quantity
        logger.debug(f"Stock reduced: {product} -{quantity} -> {self._stock[product]}")

    def increase_stock(self, product: str, quantity: int) -> None:
        self._stock[product] = self._stock.get(product, 0) + quantity
        logger.debug(f"Stock increased: {product} +{quantity} -> {self._stock[product]}")

    def get_quantity(self, product: str) -> int:
        return self._stock.get(product, 0)

    def snapshot(self) -> dict[str, int]:
        """Copy of the current stock levels."""
        return dict(self._stock)


class InMemoryPayment(PaymentService):
    """
    Mock payment provider

    Approves everything by default. Products listed in declined_products are
    always declined, and approve=False declines every charge.
    """

    def __init__(self, approve: bool = True, declined_products: set[str] | None = None):
        self.approve = approve
        self.declined_products = set(declined_products or ())
        self.charged: list[int] = []

    def process_payment(self, order: Order) -> bool:
        if not self.approve or order.product in self.declined_products:
            logger.info(f"Payment declined for order {order.id} ({order.product})")
            return False

        self.charged.append(order.id)
        return True


class InMemoryNotifier(NotificationService):
    """Records every confirmation it is asked to send."""

    def __init__(self):
        self.sent: list[Order] = []

    def send_confirmation(self, order: Order) -> None:
        # Keep a copy so later ledger updates don't rewrite history
        self.sent.append(replace(order))
        logger.info(f"Confirmation sent for order {order.id}: {order.quantity} x {order.product}")
