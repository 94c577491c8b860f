"""
======================================================
PATH: orders/services/payments.py
======================================================
PAYMENT STATUS

The ONLY place that writes Order.payment_status (admin-recorded;
there is no gateway integration). Status and stock are never touched here.
"""

from __future__ import annotations

import logging

from django.db import transaction

from orders.models import Order
from orders.services.order_lifecycle import (
    OrderNotFoundError,
    get_order_with_items,
    parse_order_id,
)

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================


class InvalidPaymentStatusError(Exception):
    pass


VALID_PAYMENT_STATUSES = frozenset(Order.PaymentStatus.values)


def update_payment_status(*, order_id, payment_status: str) -> Order:
    if not isinstance(payment_status, str) or payment_status not in VALID_PAYMENT_STATUSES:
        raise InvalidPaymentStatusError(f"Invalid payment status '{payment_status}'")

    with transaction.atomic():
        order = Order.objects.select_for_update().filter(id=parse_order_id(order_id)).first()
        if order is None:
            raise OrderNotFoundError("Order not found")

        previous = order.payment_status
        order.payment_status = payment_status
        order.save(update_fields=["payment_status", "updated_at"])

    logger.info(
        "Order payment status changed",
        extra={
            "order_id": str(order.id),
            "order_number": order.order_number,
            "from_payment_status": previous,
            "to_payment_status": payment_status,
        },
    )
    return get_order_with_items(order.id)
