# ============================================
# FILE: orderflow/core/__init__.py
# ============================================
"""
Core module for orderflow - contains the fundamental building blocks.
"""

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
from orderflow.core.logger import get_logger, set_logger
from orderflow.core.service import OrderService
from orderflow.core.types import CompensationReason, Order, OrderIdStrategy, OrderOutcome

__all__ = [
    # Config
    "OrderServiceConfig",
    "configure",
    "get_config",
    # Exceptions
    "OrderError",
    "InvalidOrderInputError",
    "InsufficientStockError",
    "PaymentFailedError",
    # Listeners
    "OrderListener",
    "LoggingOrderListener",
    "MetricsOrderListener",
    "default_listeners",
    # Logger
    "get_logger",
    "set_logger",
    # Service
    "OrderService",
    # Types
    "Order",
    "OrderIdStrategy",
    "OrderOutcome",
    "CompensationReason",
]
