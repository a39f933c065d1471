# ============================================
# FILE: orderflow/monitoring/metrics.py
# ============================================

"""
Metrics collection for order processing
"""

from typing import Any

from orderflow.core.types import CompensationReason, OrderOutcome


class OrderMetrics:
    """Collect and expose order metrics"""

    def __init__(self):
        self.metrics = {
            "total_attempted": 0,
            "total_created": 0,
            "total_rejected": 0,
            "total_compensations": 0,
            "compensated_units": 0,
            "open_orders": 0,
            "by_outcome": {},
            "by_product": {},
        }

    def record_outcome(self, outcome: OrderOutcome, product: str | None = None) -> None:
        """Record the result of a create_order call"""
        self.metrics["total_attempted"] += 1
        if outcome == OrderOutcome.CREATED:
            self.metrics["total_created"] += 1
        else:
            self.metrics["total_rejected"] += 1

        by_outcome = self.metrics["by_outcome"]
        by_outcome[outcome.value] = by_outcome.get(outcome.value, 0) + 1

        if product:
            self._update_product_stats(product, outcome)

    def _update_product_stats(self, product: str, outcome: OrderOutcome) -> None:
        if product not in self.metrics["by_product"]:
            self.metrics["by_product"][product] = {"count": 0, "created": 0, "rejected": 0}

        stats = self.metrics["by_product"][product]
        stats["count"] += 1
        if outcome == OrderOutcome.CREATED:
            stats["created"] += 1
        else:
            stats["rejected"] += 1

    def record_compensation(
        self, product: str, quantity: int, reason: CompensationReason
    ) -> None:
        """Record stock handed back to the inventory"""
        self.metrics["total_compensations"] += 1
        self.metrics["compensated_units"] += quantity

    def set_open_orders(self, count: int) -> None:
        self.metrics["open_orders"] = count

    def get_metrics(self) -> dict[str, Any]:
        """Get all metrics"""
        success_rate = (
            self.metrics["total_created"] / self.metrics["total_attempted"] * 100
            if self.metrics["total_attempted"] > 0
            else 0
        )

        return {
            **self.metrics,
            "success_rate": f"{success_rate:.2f}%",
        }
