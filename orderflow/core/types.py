# ============================================
# FILE: orderflow/core/types.py
# ============================================

"""
All type definitions, enums, and dataclasses
"""

from dataclasses import dataclass
from enum import Enum


class OrderIdStrategy(Enum):
    """
    How the service assigns ids to new orders.

    - COUNTER: one more than the highest id ever committed. Ids are never
      reused, even after removals.
    - COLLECTION_SIZE: current ledger size + 1. Can hand out an id that is
      still held by another order once something has been removed.
    """

    COUNTER = "counter"
    COLLECTION_SIZE = "collection_size"


class OrderOutcome(Enum):
    """Result of a single create_order attempt"""

    CREATED = "created"
    INVALID_INPUT = "invalid_input"
    INSUFFICIENT_STOCK = "insufficient_stock"
    PAYMENT_FAILED = "payment_failed"


class CompensationReason(Enum):
    """Why stock was handed back to the inventory"""

    PAYMENT_FAILED = "payment_failed"
    ORDER_REMOVED = "order_removed"


@dataclass
class Order:
    """
    One placed (or attempted) order.

    is_paid stays None until the payment capability has been asked, and
    is never changed after that.
    """

    id: int
    product: str
    quantity: int
    is_paid: bool | None = None
