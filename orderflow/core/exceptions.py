# ============================================
# FILE: orderflow/core/exceptions.py
# ============================================

"""
All order-related exceptions
"""


class OrderError(Exception):
    """Base order error"""

    def __init__(self, message: str, product: str | None = None, quantity: int | None = None):
        self.product = product
        self.quantity = quantity
        super().__init__(message)


class InvalidOrderInputError(OrderError, ValueError):
    """Product name missing or quantity not positive"""


class InsufficientStockError(OrderError):
    """Inventory cannot cover the requested quantity"""

    def __init__(self, product: str, quantity: int):
        super().__init__(
            f"Not enough stock for {product!r} (requested {quantity}).",
            product=product,
            quantity=quantity,
        )


class PaymentFailedError(OrderError):
    """
    Payment was declined for an order.

    Raised only after the stock reduction has been compensated, so the
    inventory is back at its pre-order level when callers see this.
    """

    def __init__(self, product: str, quantity: int, order_id: int | None = None):
        self.order_id = order_id
        super().__init__(
            f"Payment failed for {quantity} x {product!r}.",
            product=product,
            quantity=quantity,
        )
