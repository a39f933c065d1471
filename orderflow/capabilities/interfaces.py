"""
Capability interfaces.

The order service depends on three external collaborators it does not
implement: inventory, payment and notification. Each is an abstract base
class so implementations (real clients, in-memory backends, test fakes)
can be swapped in at construction time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from orderflow.core.types import Order


class InventoryService(ABC):
    """
    Stock keeping for products.

    reduce_stock and increase_stock are expected to succeed; the only
    failure the order service reacts to is a False from check_stock.
    """

    @abstractmethod
    def check_stock(self, product: str, quantity: int) -> bool:
        """
        Check whether the requested quantity is available.

        Args:
            product: Product identifier
            quantity: Units requested

        Returns:
            True if the stock covers the request
        """
        ...

    @abstractmethod
    def reduce_stock(self, product: str, quantity: int) -> None:
        """Take quantity units of product out of stock."""
        ...

    @abstractmethod
    def increase_stock(self, product: str, quantity: int) -> None:
        """Put quantity units of product back into stock."""
        ...


class PaymentService(ABC):
    """Charges a customer for an order."""

    @abstractmethod
    def process_payment(self, order: Order) -> bool:
        """
        Attempt to charge for the order.

        Returns:
            True if the charge went through, False if it was declined
        """
        ...


class NotificationService(ABC):
    """Delivers order confirmations. Fire-and-forget."""

    @abstractmethod
    def send_confirmation(self, order: Order) -> None:
        """Send a confirmation for a paid order."""
        ...
