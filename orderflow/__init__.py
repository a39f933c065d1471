# ============================================
# FILE: orderflow/__init__.py
# ============================================

"""
orderflow - single-item order placement with compensating stock handling

Validates an order, reserves stock, charges payment and sends a confirmation,
keeping an in-memory ledger of paid orders. When a charge is declined the
reserved stock is put back before the error reaches the caller.

Usage:
    >>> from orderflow import OrderService
    >>> from orderflow.capabilities import InMemoryInventory, InMemoryNotifier, InMemoryPayment
    >>>
    >>> service = OrderService(
    ...     inventory=InMemoryInventory({"Phone": 10}),
    ...     payment=InMemoryPayment(),
    ...     notification=InMemoryNotifier(),
    ... )
    >>> order = service.create_order("Phone", 3)
    >>> service.update_order(order.id, 5)
    True
    >>> service.remove_order(order.id)
    True

Real inventory, payment and notification clients implement the interfaces in
orderflow.capabilities.interfaces.
"""

from orderflow.capabilities.interfaces import (
    InventoryService,
    NotificationService,
    PaymentService,
)
from orderflow.core.config import OrderServiceConfig, configure, get_config
from orderflow.core.exceptions import (
    InsufficientStockError,
    InvalidOrderInputError,
    OrderError,
    PaymentFailedError,
)
from orderflow.core.listeners import (
    LoggingOrderListener,
    MetricsOrderListener,
    OrderListener,
    default_listeners,
)
from orderflow.core.service import OrderService
from orderflow.core.types import CompensationReason, Order, OrderIdStrategy, OrderOutcome

__version__ = "0.1.0"

__all__ = [
    # Primary exports
    "OrderService",
    "Order",
    # Capabilities
    "InventoryService",
    "PaymentService",
    "NotificationService",
    # Configuration
    "OrderServiceConfig",
    "configure",
    "get_config",
    # Types
    "OrderIdStrategy",
    "OrderOutcome",
    "CompensationReason",
    # Listeners
    "OrderListener",
    "LoggingOrderListener",
    "MetricsOrderListener",
    "default_listeners",
    # Exceptions
    "OrderError",
    "InvalidOrderInputError",
    "InsufficientStockError",
    "PaymentFailedError",
]
