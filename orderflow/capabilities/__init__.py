"""
Capabilities the order service depends on, plus in-memory backends.
"""

from orderflow.capabilities.interfaces import (
    InventoryService,
    NotificationService,
    PaymentService,
)
from orderflow.capabilities.memory import (
    InMemoryInventory,
    InMemoryNotifier,
    InMemoryPayment,
)

__all__ = [
    "InventoryService",
    "PaymentService",
    "NotificationService",
    "InMemoryInventory",
    "InMemoryPayment",
    "InMemoryNotifier",
]
