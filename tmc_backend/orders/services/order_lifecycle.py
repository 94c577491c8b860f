"""
======================================================
PATH: orders/services/order_lifecycle.py
======================================================
ORDER LIFECYCLE MANAGER

The ONLY place that writes Order.status.

Each call moves one order to one target status, atomically:
- stamps confirmed_at / shipped_at / delivered_at / cancelled_at the first
  time the matching status is reached (never overwritten afterwards)
- reconciles product stock against the status the order had BEFORE the call:
    * -> DELIVERED (from anything else): stock_count -= quantity, floored at 0,
      in_stock = stock_count > 0
    * DELIVERED -> CANCELLED: stock_count += quantity, in_stock = True
    * anything else: stock untouched

Concurrency:
- The order row is locked (select_for_update) and the previous status is read
  from that locked row, so two concurrent DELIVERED calls cannot both decrement.
- Product rows are locked before their stock is read.

Authorization is the caller's job (admin-only views / Django admin).
"""

from __future__ import annotations

import logging
import uuid

from django.db import transaction
from django.db.models import F, Prefetch
from django.utils import timezone

from orders.models import Order, OrderItem
from products.models import Product

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================


class OrderLifecycleError(Exception):
    pass


class OrderNotFoundError(OrderLifecycleError):
    pass


class InvalidOrderStatusError(OrderLifecycleError):
    pass


# ============================================================
# STATE DEFINITIONS
# ============================================================

VALID_STATUSES = frozenset(Order.Status.values)

# PENDING and PROCESSING never stamp a timestamp
TIMESTAMP_FIELDS = {
    Order.Status.CONFIRMED: "confirmed_at",
    Order.Status.SHIPPED: "shipped_at",
    Order.Status.DELIVERED: "delivered_at",
    Order.Status.CANCELLED: "cancelled_at",
}


# ============================================================
# DOMAIN RULES
# ============================================================


def validate_status(target_status) -> str:
    if not isinstance(target_status, str) or target_status not in VALID_STATUSES:
        raise InvalidOrderStatusError(f"Invalid status '{target_status}'")
    return target_status


def parse_order_id(order_id) -> uuid.UUID:
    # Malformed ids cannot name an order
    try:
        return order_id if isinstance(order_id, uuid.UUID) else uuid.UUID(str(order_id))
    except (TypeError, ValueError, AttributeError):
        raise OrderNotFoundError("Order not found")


def stock_effect(*, previous_status: str, target_status: str) -> str | None:
    """
    "decrement", "restore" or None for a previous -> target move.
    """
    if target_status == Order.Status.DELIVERED and previous_status != Order.Status.DELIVERED:
        return "decrement"
    if target_status == Order.Status.CANCELLED and previous_status == Order.Status.DELIVERED:
        return "restore"
    return None


# ============================================================
# STOCK RECONCILIATION
# ============================================================


def _decrement_stock(items: list[OrderItem], products: dict) -> None:
    for item in items:
        product = products[item.product_id]
        new_stock = max(0, int(product.stock_count) - int(item.quantity))
        product.stock_count = new_stock
        product.in_stock = new_stock > 0
        product.save(update_fields=["stock_count", "in_stock", "updated_at"])


def _restore_stock(items: list[OrderItem]) -> None:
    for item in items:
        Product.objects.filter(id=item.product_id).update(
            stock_count=F("stock_count") + int(item.quantity),
            in_stock=True,
            updated_at=timezone.now(),
        )


# ============================================================
# PUBLIC API
# ============================================================


def transition_status(*, order_id, target_status: str) -> Order:
    """
    Move an order to target_status and reconcile stock in one transaction.

    Raises:
    - InvalidOrderStatusError before any database work
    - OrderNotFoundError when the id is malformed or the order does not exist
      (nothing is written)
    """
    target_status = validate_status(target_status)

    with transaction.atomic():
        order_id = parse_order_id(order_id)
        order = Order.objects.select_for_update().filter(id=order_id).first()
        if order is None:
            raise OrderNotFoundError("Order not found")

        previous_status = order.status
        items = list(OrderItem.objects.filter(order_id=order.id).order_by("created_at"))

        effect = stock_effect(previous_status=previous_status, target_status=target_status)

        if effect is not None:
            products = Product.objects.select_for_update().in_bulk(
                {item.product_id for item in items}
            )
            if effect == "decrement":
                _decrement_stock(items, products)
            else:
                _restore_stock(items)

        now = timezone.now()
        update_fields = ["status", "updated_at"]

        stamp_field = TIMESTAMP_FIELDS.get(target_status)
        if stamp_field and getattr(order, stamp_field) is None:
            setattr(order, stamp_field, now)
            update_fields.append(stamp_field)

        order.status = target_status
        order.save(update_fields=update_fields)

    logger.info(
        "Order status changed",
        extra={
            "order_id": str(order.id),
            "order_number": order.order_number,
            "from_status": previous_status,
            "to_status": target_status,
            "stock_effect": effect or "none",
            "item_count": len(items),
        },
    )

    return get_order_with_items(order.id)


def get_order_with_items(order_id) -> Order:
    """
    Fresh read of an order with its buyer, items and current product rows.
    """
    return (
        Order.objects.select_related("user")
        .prefetch_related(
            Prefetch(
                "items",
                queryset=OrderItem.objects.select_related("product").order_by("created_at"),
            )
        )
        .get(id=order_id)
    )
