"""
======================================================
PATH: orders/services/order_placement.py
======================================================
ORDER PLACEMENT (CART -> ORDER)

Rules:
- The buyer's whole cart becomes one PENDING order.
- Every product must still be in stock (in_stock flag) at checkout.
- OrderItem.price snapshots the product price at checkout.
- The cart is emptied in the same transaction.
- Stock is NOT touched here; it moves only when the order is DELIVERED.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction

from cart.models import CartItem
from orders.models import Order, OrderItem
from orders.services.order_lifecycle import get_order_with_items

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================


class OrderPlacementError(Exception):
    pass


class EmptyCartError(OrderPlacementError):
    pass


class OutOfStockError(OrderPlacementError):
    pass


# ============================================================
# PLACEMENT
# ============================================================


@transaction.atomic
def place_order(*, user, shipping_address: dict | None = None, notes: str = "") -> Order:
    cart_items = list(
        CartItem.objects.select_for_update()
        .select_related("product")
        .filter(user=user)
        .order_by("created_at")
    )

    if not cart_items:
        raise EmptyCartError("Cart is empty")

    for ci in cart_items:
        if not ci.product.in_stock:
            raise OutOfStockError(f"Product {ci.product.name} is out of stock")

    total = sum(
        (Decimal(ci.product.price) * ci.quantity for ci in cart_items),
        Decimal("0.00"),
    ).quantize(Decimal("0.01"))

    order = Order.objects.create(
        user=user,
        total_amount=total,
        shipping_address=shipping_address or {},
        notes=notes or "",
    )

    OrderItem.objects.bulk_create(
        [
            OrderItem(
                order=order,
                product=ci.product,
                quantity=ci.quantity,
                price=ci.product.price,
            )
            for ci in cart_items
        ]
    )

    CartItem.objects.filter(user=user).delete()

    logger.info(
        "Order placed",
        extra={
            "order_id": str(order.id),
            "order_number": order.order_number,
            "user_id": str(user.id),
            "total_amount": str(total),
            "item_count": len(cart_items),
        },
    )

    return get_order_with_items(order.id)
