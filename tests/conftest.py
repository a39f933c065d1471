"""
Pytest configuration and shared fixtures for order service tests
"""

import logging
from unittest.mock import create_autospec

import pytest

import orderflow.core.config as config_module
import orderflow.core.env as env_module
from orderflow import OrderService, OrderServiceConfig
from orderflow.capabilities.interfaces import (
    InventoryService,
    NotificationService,
    PaymentService,
)
from orderflow.core.logger import set_logger

# ============================================
# AUTO-USE FIXTURES
# ============================================


@pytest.fixture(autouse=True)
def reset_orderflow_globals():
    """
    Undo global state tests may leave behind: custom loggers, the global
    config singleton and handlers installed by setup_order_logging().
    """
    yield

    set_logger(None)
    config_module._global_config = None
    env_module._global_env = None

    root_logger = logging.getLogger("orderflow")
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.NOTSET)


# ============================================
# CAPABILITY FAKES
# ============================================


@pytest.fixture
def inventory():
    """Inventory fake that has stock for everything."""
    mock = create_autospec(InventoryService, instance=True)
    mock.check_stock.return_value = True
    return mock


@pytest.fixture
def payment():
    """Payment fake that approves every charge."""
    mock = create_autospec(PaymentService, instance=True)
    mock.process_payment.return_value = True
    return mock


@pytest.fixture
def notification():
    return create_autospec(NotificationService, instance=True)


@pytest.fixture
def config():
    """Default config without listeners, so tests see only their own."""
    return OrderServiceConfig(logging=False, metrics=False)


@pytest.fixture
def service(inventory, payment, notification, config):
    return OrderService(inventory, payment, notification, config=config)
