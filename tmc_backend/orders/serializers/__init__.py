from .order import (
    OrderItemSerializer,
    OrderSerializer,
    OrderStatusInputSerializer,
    PaymentStatusInputSerializer,
    PlaceOrderInputSerializer,
)

__all__ = [
    "OrderSerializer",
    "OrderItemSerializer",
    "PlaceOrderInputSerializer",
    "OrderStatusInputSerializer",
    "PaymentStatusInputSerializer",
]
