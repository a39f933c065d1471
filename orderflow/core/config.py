"""
OrderServiceConfig - Unified configuration for the order service.

Wires together:
- Order id assignment strategy
- Whether get_orders() hands out live orders or copies
- Observability (logging and metrics listeners)

Example:
    >>> from orderflow import OrderServiceConfig, configure
    >>>
    >>> config = OrderServiceConfig(
    ...     id_strategy="counter",
    ...     share_order_references=False,
    ...     metrics=True,
    ... )
    >>> configure(config)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from orderflow.core.types import OrderIdStrategy

if TYPE_CHECKING:
    from orderflow.core.listeners import OrderListener

logger = logging.getLogger(__name__)


@dataclass
class OrderServiceConfig:
    """
    Unified configuration for the order service.

    Observability values can be actual listener instances or boolean flags
    for the defaults.

    Attributes:
        id_strategy: How new order ids are assigned (counter or collection_size)
        share_order_references: get_orders() returns the live Order objects
            when True, copies when False
        logging: Enable lifecycle logging (True/False or LoggingOrderListener instance)
        metrics: Enable metrics collection (True/False or MetricsOrderListener instance)
    """

    id_strategy: OrderIdStrategy | str = OrderIdStrategy.COUNTER
    share_order_references: bool = True

    # Observability - can be bool or actual listener instance
    logging: bool | OrderListener = True
    metrics: bool | OrderListener = False

    def __post_init__(self) -> None:
        if not isinstance(self.id_strategy, OrderIdStrategy):
            try:
                self.id_strategy = OrderIdStrategy(str(self.id_strategy).lower())
            except ValueError:
                valid = ", ".join(s.value for s in OrderIdStrategy)
                msg = f"Unknown id strategy: {self.id_strategy!r} (expected one of: {valid})"
                raise ValueError(msg) from None

    def _build_listeners(self) -> list[OrderListener]:
        """Build listeners list from configuration."""
        from orderflow.core.listeners import (
            MetricsOrderListener,
            OrderListener,
            default_listeners,
        )

        listeners: list[OrderListener] = []

        if isinstance(self.logging, OrderListener):
            listeners.append(self.logging)
        elif self.logging:
            listeners.extend(default_listeners())

        if isinstance(self.metrics, OrderListener):
            listeners.append(self.metrics)
        elif self.metrics:
            listeners.append(MetricsOrderListener())

        return listeners

    @property
    def listeners(self) -> list[OrderListener]:
        """
        Listeners for one OrderService.

        Switches set to True yield new default listeners on every access, so
        services built from the same config don't share counters. Listener
        instances are returned as-is.
        """
        return self._build_listeners()

    def with_id_strategy(self, id_strategy: OrderIdStrategy | str) -> OrderServiceConfig:
        """Create a new config with a different id strategy (immutable update)."""
        return OrderServiceConfig(
            id_strategy=id_strategy,
            share_order_references=self.share_order_references,
            logging=self.logging,
            metrics=self.metrics,
        )

    @classmethod
    def from_env(cls, load_dotenv: bool = True) -> OrderServiceConfig:
        """
        Create configuration from environment variables.

        Environment variables:
            ORDERFLOW_ID_STRATEGY: counter (default) or collection_size
            ORDERFLOW_SHARE_ORDERS: Hand out live orders from get_orders (true/false)
            ORDERFLOW_LOGGING: Enable lifecycle logging (true/false)
            ORDERFLOW_METRICS: Enable metrics (true/false)

        Args:
            load_dotenv: If True, loads .env file before reading variables
        """
        from orderflow.core.env import get_env

        env = get_env()
        if load_dotenv:
            env.load()

        return cls(
            id_strategy=env.get("ORDERFLOW_ID_STRATEGY", OrderIdStrategy.COUNTER.value),
            share_order_references=env.get_bool("ORDERFLOW_SHARE_ORDERS", True),
            logging=env.get_bool("ORDERFLOW_LOGGING", True),
            metrics=env.get_bool("ORDERFLOW_METRICS", False),
        )

    @classmethod
    def from_file(cls, file_path: str | Path, substitute_env: bool = True) -> OrderServiceConfig:
        """
        Load configuration from a YAML or JSON file.

        Supports environment variable substitution using ${VAR} syntax.

        Example:
            >>> config = OrderServiceConfig.from_file("orderflow.yaml")

            # In orderflow.yaml:
            # orders:
            #   id_strategy: ${ORDERFLOW_ID_STRATEGY:-counter}
            #   share_references: false
            # observability:
            #   logging:
            #     enabled: true
            #   metrics:
            #     enabled: true
        """
        from orderflow.core.env import get_env

        path = Path(file_path)
        if not path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        with path.open() as f:
            data = yaml.safe_load(f)

        if not data:
            return cls()

        if substitute_env:
            env = get_env()
            env.load()
            data = env.substitute_dict(data)

        orders_data = data.get("orders") or {}
        obs_data = data.get("observability") or {}

        return cls(
            id_strategy=orders_data.get("id_strategy", OrderIdStrategy.COUNTER.value),
            share_order_references=_as_bool(orders_data.get("share_references", True)),
            logging=_as_bool((obs_data.get("logging") or {}).get("enabled", True)),
            metrics=_as_bool((obs_data.get("metrics") or {}).get("enabled", False)),
        )


def _as_bool(value: Any) -> bool:
    # Substituted ${VAR} values arrive as strings
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


# Global configuration singleton
_global_config: OrderServiceConfig | None = None


def get_config() -> OrderServiceConfig:
    """Get the global order service configuration."""
    global _global_config
    if _global_config is None:
        _global_config = OrderServiceConfig()
    return _global_config


def configure(config: OrderServiceConfig) -> None:
    """Set the global order service configuration."""
    global _global_config
    _global_config = config
    logger.info(f"Order service configured: id_strategy={config.id_strategy.value}")
