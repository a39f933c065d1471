"""
Tests for order lifecycle listeners and how OrderService drives them.
"""

from unittest.mock import MagicMock

import pytest

from orderflow import OrderService, OrderServiceConfig
from orderflow.core.exceptions import (
    InsufficientStockError,
    InvalidOrderInputError,
    PaymentFailedError,
)
from orderflow.core.listeners import (
    LoggingOrderListener,
    MetricsOrderListener,
    OrderListener,
    default_listeners,
)
from orderflow.core.types import CompensationReason, Order, OrderOutcome
from orderflow.monitoring.metrics import OrderMetrics


class RecordingListener(OrderListener):
    def __init__(self):
        self.events = []

    def on_order_created(self, order):
        self.events.append(("created", order.id))

    def on_order_rejected(self, product, quantity, error):
        self.events.append(("rejected", product, quantity, type(error)))

    def on_compensation(self, product, quantity, reason):
        self.events.append(("compensation", product, quantity, reason))

    def on_order_updated(self, order, previous_quantity):
        self.events.append(("updated", order.id, previous_quantity, order.quantity))

    def on_order_removed(self, order):
        self.events.append(("removed", order.id))

    def on_notification_failed(self, order, error):
        self.events.append(("notification_failed", order.id))


@pytest.fixture
def recorder():
    return RecordingListener()


@pytest.fixture
def observed_service(inventory, payment, notification, config, recorder):
    return OrderService(inventory, payment, notification, config=config, listeners=[recorder])


class TestServiceEvents:
    def test_full_lifecycle(self, observed_service, recorder):
        order = observed_service.create_order("Phone", 2)
        observed_service.update_order(order.id, 5)
        observed_service.remove_order(order.id)

        assert recorder.events == [
            ("created", 1),
            ("updated", 1, 2, 5),
            ("compensation", "Phone", 5, CompensationReason.ORDER_REMOVED),
            ("removed", 1),
        ]

    def test_payment_failure_events(self, observed_service, payment, recorder):
        payment.process_payment.return_value = False

        with pytest.raises(PaymentFailedError):
            observed_service.create_order("Phone", 2)

        assert recorder.events == [
            ("compensation", "Phone", 2, CompensationReason.PAYMENT_FAILED),
            ("rejected", "Phone", 2, PaymentFailedError),
        ]

    def test_rejections(self, observed_service, inventory, recorder):
        with pytest.raises(InvalidOrderInputError):
            observed_service.create_order("", 1)
        inventory.check_stock.return_value = False
        with pytest.raises(InsufficientStockError):
            observed_service.create_order("Phone", 1)

        assert recorder.events == [
            ("rejected", "", 1, InvalidOrderInputError),
            ("rejected", "Phone", 1, InsufficientStockError),
        ]

    def test_no_events_for_noop_update_or_remove(self, observed_service, recorder):
        observed_service.update_order(1, 5)
        observed_service.remove_order(1)

        assert recorder.events == []

    def test_notification_failure_event(self, observed_service, notification, recorder):
        notification.send_confirmation.side_effect = RuntimeError("down")

        observed_service.create_order("Phone", 1)

        assert recorder.events == [("created", 1), ("notification_failed", 1)]

    def test_failing_listener_does_not_break_service(self, observed_service, recorder):
        broken = MagicMock(spec=OrderListener)
        broken.on_order_created.side_effect = RuntimeError("listener bug")
        observed_service.add_listener(broken)

        order = observed_service.create_order("Phone", 1)

        assert observed_service.get_orders() == [order]
        broken.on_order_created.assert_called_once_with(order)

    def test_compensation_started_precedes_stock_return(
        self, inventory, payment, notification, config
    ):
        calls = []
        listener = MagicMock(spec=OrderListener)
        listener.on_compensation_started.side_effect = lambda *a: calls.append("started")
        listener.on_compensation.side_effect = lambda *a: calls.append("completed")
        inventory.increase_stock.side_effect = lambda *a: calls.append("increase_stock")
        payment.process_payment.return_value = False
        service = OrderService(inventory, payment, notification, config=config, listeners=[listener])

        with pytest.raises(PaymentFailedError):
            service.create_order("Phone", 2)

        assert calls == ["started", "increase_stock", "completed"]
        listener.on_compensation_started.assert_called_once_with(
            "Phone", 2, CompensationReason.PAYMENT_FAILED
        )

    def test_capability_order_errors_are_not_rejections(
        self, observed_service, inventory, recorder
    ):
        inventory.check_stock.side_effect = InsufficientStockError("Phone", 1)

        with pytest.raises(InsufficientStockError):
            observed_service.create_order("Phone", 1)

        assert recorder.events == []

    def test_services_from_one_config_get_own_metrics(self, inventory, payment, notification):
        config = OrderServiceConfig(logging=False, metrics=True)
        first = OrderService(inventory, payment, notification, config=config)
        second = OrderService(inventory, payment, notification, config=config)

        first.create_order("Phone", 1)
        first.create_order("Phone", 1)
        second.create_order("Phone", 1)

        first_metrics, = first._listeners
        second_metrics, = second._listeners
        assert first_metrics is not second_metrics
        assert first_metrics.metrics.metrics["open_orders"] == 2
        assert second_metrics.metrics.metrics["open_orders"] == 1

    def test_listeners_default_to_config(self, inventory, payment, notification):
        metrics = MetricsOrderListener()
        config = OrderServiceConfig(logging=False, metrics=metrics)

        service = OrderService(inventory, payment, notification, config=config)
        service.create_order("Phone", 1)

        assert metrics.metrics.metrics["total_created"] == 1


class TestMetricsOrderListener:
    def test_default_collector(self):
        listener = MetricsOrderListener()
        assert isinstance(listener.metrics, OrderMetrics)

    @pytest.mark.parametrize(
        "error, outcome",
        [
            (InvalidOrderInputError("bad"), OrderOutcome.INVALID_INPUT),
            (InsufficientStockError("Phone", 1), OrderOutcome.INSUFFICIENT_STOCK),
            (PaymentFailedError("Phone", 1), OrderOutcome.PAYMENT_FAILED),
        ],
    )
    def test_rejection_outcomes(self, error, outcome):
        collector = MagicMock()
        listener = MetricsOrderListener(metrics=collector)

        listener.on_order_rejected("Phone", 1, error)

        collector.record_outcome.assert_called_once_with(outcome, "Phone")

    def test_non_string_product_not_reported(self):
        collector = MagicMock()
        listener = MetricsOrderListener(metrics=collector)

        listener.on_order_rejected(None, 1, InvalidOrderInputError("bad"))

        collector.record_outcome.assert_called_once_with(OrderOutcome.INVALID_INPUT, None)

    def test_unknown_error_not_recorded(self):
        collector = MagicMock()
        listener = MetricsOrderListener(metrics=collector)

        listener.on_order_rejected("Phone", 1, RuntimeError("boom"))

        collector.record_outcome.assert_not_called()

    def test_open_orders_gauge(self):
        collector = MagicMock()
        listener = MetricsOrderListener(metrics=collector)
        order = Order(id=1, product="Phone", quantity=1, is_paid=True)

        listener.on_order_created(order)
        listener.on_order_created(order)
        listener.on_order_removed(order)

        assert [c.args[0] for c in collector.set_open_orders.call_args_list] == [1, 2, 1]

    def test_compensation_recorded(self):
        collector = MagicMock()
        listener = MetricsOrderListener(metrics=collector)

        listener.on_compensation("Phone", 3, CompensationReason.PAYMENT_FAILED)

        collector.record_compensation.assert_called_once_with(
            "Phone", 3, CompensationReason.PAYMENT_FAILED
        )


class TestLoggingOrderListener:
    def test_delegates_to_order_logger(self):
        order_logger = MagicMock()
        listener = LoggingOrderListener(logger=order_logger)
        order = Order(id=1, product="Phone", quantity=2, is_paid=True)
        error = RuntimeError("x")

        listener.on_order_created(order)
        listener.on_order_updated(order, 1)
        listener.on_order_removed(order)
        listener.on_notification_failed(order, error)
        listener.on_compensation_started("Phone", 2, CompensationReason.ORDER_REMOVED)
        listener.on_compensation("Phone", 2, CompensationReason.ORDER_REMOVED)
        listener.on_order_rejected("Phone", 2, error)

        order_logger.order_created.assert_called_once_with(order)
        order_logger.order_updated.assert_called_once_with(order, 1)
        order_logger.order_removed.assert_called_once_with(order)
        order_logger.notification_failed.assert_called_once_with(order, error)
        order_logger.compensation_started.assert_called_once_with(
            "Phone", 2, CompensationReason.ORDER_REMOVED
        )
        order_logger.compensation_completed.assert_called_once_with(
            "Phone", 2, CompensationReason.ORDER_REMOVED
        )
        order_logger.order_rejected.assert_called_once_with("Phone", 2, error)

    def test_logs_through_standard_logging(self, caplog, inventory, payment, notification):
        service = OrderService(
            inventory,
            payment,
            notification,
            config=OrderServiceConfig(logging=False),
            listeners=[LoggingOrderListener()],
        )

        with caplog.at_level("INFO", logger="orderflow"):
            service.create_order("Phone", 2)

        assert "Order created: #1 2 x Phone" in caplog.text

    def test_logs_both_compensation_stages(self, caplog, inventory, payment, notification):
        payment.process_payment.return_value = False
        service = OrderService(
            inventory,
            payment,
            notification,
            config=OrderServiceConfig(logging=False),
            listeners=[LoggingOrderListener()],
        )

        with caplog.at_level("INFO", logger="orderflow"), pytest.raises(PaymentFailedError):
            service.create_order("Phone", 2)

        messages = [r.getMessage() for r in caplog.records if r.name == "orderflow.orders"]
        assert messages[:2] == [
            "Compensation started: returning 2 x Phone (payment_failed)",
            "Compensation completed: 2 x Phone back in stock",
        ]


def test_default_listeners():
    listeners = default_listeners()
    assert len(listeners) == 1
    assert isinstance(listeners[0], LoggingOrderListener)


def test_config_logging_switch_uses_default_listeners(monkeypatch):
    marker = OrderListener()
    monkeypatch.setattr("orderflow.core.listeners.default_listeners", lambda: [marker])

    assert OrderServiceConfig(logging=True).listeners == [marker]
