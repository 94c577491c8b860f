from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from orders.models import Order, OrderItem
from orders.services.order_lifecycle import (
    InvalidOrderStatusError,
    OrderNotFoundError,
    stock_effect,
    transition_status,
)
from products.models import Category, Product

User = get_user_model()


class LifecycleFixtureMixin:
    def setUp(self):
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="pass123",
            role=User.Role.ADMIN,
        )
        self.buyer = User.objects.create_user(
            email="buyer@example.com",
            password="pass123",
            first_name="Ali",
            last_name="Raza",
        )

        category = Category.objects.create(name="Marinated Chicken")

        self.product_a = Product.objects.create(
            category=category,
            name="Tikka Boti",
            description="Classic tikka marinade",
            price=Decimal("1200.00"),
            size="1 kg",
            stock_count=5,
            in_stock=True,
        )
        # stock 0 but forced in stock by an admin
        self.product_b = Product.objects.create(
            category=category,
            name="Malai Boti",
            description="Creamy malai marinade",
            price=Decimal("1400.00"),
            size="1 kg",
            stock_count=0,
            in_stock=True,
        )

        self.order = Order.objects.create(
            user=self.buyer,
            total_amount=Decimal("3800.00"),
        )
        OrderItem.objects.create(
            order=self.order,
            product=self.product_a,
            quantity=2,
            price=Decimal("1200.00"),
        )
        OrderItem.objects.create(
            order=self.order,
            product=self.product_b,
            quantity=1,
            price=Decimal("1400.00"),
        )

    def assertStock(self, product, stock_count, in_stock):
        product.refresh_from_db()
        self.assertEqual(product.stock_count, stock_count)
        self.assertEqual(product.in_stock, in_stock)


class StockEffectTests(TestCase):
    def test_effects(self):
        S = Order.Status

        self.assertEqual(stock_effect(previous_status=S.SHIPPED, target_status=S.DELIVERED), "decrement")
        self.assertEqual(stock_effect(previous_status=S.PENDING, target_status=S.DELIVERED), "decrement")
        self.assertIsNone(stock_effect(previous_status=S.DELIVERED, target_status=S.DELIVERED))
        self.assertEqual(stock_effect(previous_status=S.DELIVERED, target_status=S.CANCELLED), "restore")
        self.assertIsNone(stock_effect(previous_status=S.PENDING, target_status=S.CANCELLED))
        self.assertIsNone(stock_effect(previous_status=S.DELIVERED, target_status=S.SHIPPED))


class TransitionStatusServiceTests(LifecycleFixtureMixin, TestCase):
    """
    GUARANTEES:
    - Delivering decrements stock once, floored at 0
    - Cancelling a delivered order restores stock and marks it in stock
    - Other transitions never touch stock
    - Each *_at timestamp is stamped once
    - Invalid input changes nothing
    """

    def test_deliver_decrements_stock(self):
        order = transition_status(order_id=self.order.id, target_status="DELIVERED")

        self.assertEqual(order.status, Order.Status.DELIVERED)
        self.assertIsNotNone(order.delivered_at)
        self.assertStock(self.product_a, 3, True)
        self.assertStock(self.product_b, 0, False)

    def test_cancel_after_delivery_restores_stock(self):
        transition_status(order_id=self.order.id, target_status="DELIVERED")
        order = transition_status(order_id=self.order.id, target_status="CANCELLED")

        self.assertEqual(order.status, Order.Status.CANCELLED)
        self.assertIsNotNone(order.cancelled_at)
        self.assertStock(self.product_a, 5, True)
        self.assertStock(self.product_b, 1, True)

    def test_repeat_delivery_does_not_decrement_twice(self):
        transition_status(order_id=self.order.id, target_status="DELIVERED")
        transition_status(order_id=self.order.id, target_status="DELIVERED")

        self.assertStock(self.product_a, 3, True)

    def test_stock_floors_at_zero(self):
        self.product_a.stock_count = 1
        self.product_a.save(update_fields=["stock_count"])

        transition_status(order_id=self.order.id, target_status="DELIVERED")

        self.assertStock(self.product_a, 0, False)

    def test_non_delivery_transitions_leave_stock_alone(self):
        for target in ["CONFIRMED", "PROCESSING", "SHIPPED", "CANCELLED", "PENDING"]:
            transition_status(order_id=self.order.id, target_status=target)

        self.assertStock(self.product_a, 5, True)
        self.assertStock(self.product_b, 0, True)

    def test_redelivery_after_leaving_delivered_decrements_again(self):
        transition_status(order_id=self.order.id, target_status="DELIVERED")
        transition_status(order_id=self.order.id, target_status="SHIPPED")
        transition_status(order_id=self.order.id, target_status="DELIVERED")

        self.assertStock(self.product_a, 1, True)

    def test_timestamps_are_stamped_once(self):
        first = transition_status(order_id=self.order.id, target_status="CONFIRMED")
        confirmed_at = first.confirmed_at
        self.assertIsNotNone(confirmed_at)

        transition_status(order_id=self.order.id, target_status="PROCESSING")
        again = transition_status(order_id=self.order.id, target_status="CONFIRMED")

        self.assertEqual(again.confirmed_at, confirmed_at)
        self.assertIsNone(again.shipped_at)
        self.assertIsNone(again.delivered_at)

    def test_pending_and_processing_stamp_nothing(self):
        order = transition_status(order_id=self.order.id, target_status="PROCESSING")

        self.assertIsNone(order.confirmed_at)
        self.assertIsNone(order.shipped_at)
        self.assertIsNone(order.delivered_at)
        self.assertIsNone(order.cancelled_at)

    def test_invalid_status_changes_nothing(self):
        with self.assertRaises(InvalidOrderStatusError):
            transition_status(order_id=self.order.id, target_status="SHIPPEDX")

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.PENDING)
        self.assertStock(self.product_a, 5, True)

    def test_missing_order(self):
        missing = "00000000-0000-0000-0000-000000000000"

        with self.assertRaises(OrderNotFoundError):
            transition_status(order_id=missing, target_status="DELIVERED")

        self.assertStock(self.product_a, 5, True)

    def test_malformed_order_id_is_not_found(self):
        with self.assertRaises(OrderNotFoundError):
            transition_status(order_id="not-a-real-id", target_status="DELIVERED")

        self.assertStock(self.product_a, 5, True)

    def test_failure_mid_transaction_rolls_back(self):
        with mock.patch(
            "orders.services.order_lifecycle._decrement_stock",
            side_effect=RuntimeError("database unavailable"),
        ):
            with self.assertRaises(RuntimeError):
                transition_status(order_id=self.order.id, target_status="DELIVERED")

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.PENDING)
        self.assertIsNone(self.order.delivered_at)
        self.assertStock(self.product_a, 5, True)


class OrderStatusEndpointTests(LifecycleFixtureMixin, TestCase):
    """
    PATCH /api/orders/<id>/status/

    GUARANTEES:
    - Admin only (401 otherwise)
    - 400 for unknown statuses, 500 with a message for missing orders
      and failed transactions
    - Response carries items with refreshed product stock
    """

    def setUp(self):
        super().setUp()
        self.client = APIClient()

    def _url(self, order_id=None):
        return f"/api/orders/{order_id or self.order.id}/status/"

    def test_admin_delivers_order(self):
        self.client.force_authenticate(self.admin)

        res = self.client.patch(self._url(), {"status": "DELIVERED"}, format="json")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], "DELIVERED")
        self.assertIsNotNone(res.data["delivered_at"])

        stock = {item["product"]["name"]: item["product"]["stock_count"] for item in res.data["items"]}
        self.assertEqual(stock, {"Tikka Boti": 3, "Malai Boti": 0})
        self.assertStock(self.product_b, 0, False)

    def test_cancel_after_delivery_via_api(self):
        self.client.force_authenticate(self.admin)
        self.client.patch(self._url(), {"status": "DELIVERED"}, format="json")

        res = self.client.patch(self._url(), {"status": "CANCELLED"}, format="json")

        self.assertEqual(res.status_code, 200)
        self.assertStock(self.product_a, 5, True)
        self.assertStock(self.product_b, 1, True)

    def test_invalid_status_is_400(self):
        self.client.force_authenticate(self.admin)

        res = self.client.patch(self._url(), {"status": "SHIPPEDX"}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "INVALID_STATUS")

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.PENDING)

    def test_missing_order_is_500_with_message(self):
        self.client.force_authenticate(self.admin)

        res = self.client.patch(
            self._url("00000000-0000-0000-0000-000000000000"),
            {"status": "DELIVERED"},
            format="json",
        )

        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.data["error"]["message"], "Order not found")
        self.assertStock(self.product_a, 5, True)

    def test_malformed_order_id_is_500_json(self):
        self.client.force_authenticate(self.admin)

        res = self.client.patch(self._url("not-a-real-id"), {"status": "DELIVERED"}, format="json")

        self.assertEqual(res.status_code, 500)
        self.assertEqual(res["Content-Type"], "application/json")
        self.assertEqual(res.data["error"]["code"], "ORDER_NOT_FOUND")
        self.assertEqual(res.data["error"]["message"], "Order not found")
        self.assertStock(self.product_a, 5, True)

    def test_transaction_failure_is_500(self):
        self.client.force_authenticate(self.admin)

        with mock.patch(
            "orders.services.order_lifecycle._decrement_stock",
            side_effect=RuntimeError("database unavailable"),
        ):
            res = self.client.patch(self._url(), {"status": "DELIVERED"}, format="json")

        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.data["error"]["message"], "database unavailable")

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.PENDING)
        self.assertStock(self.product_a, 5, True)

    def test_non_admin_is_401(self):
        self.client.force_authenticate(self.buyer)

        res = self.client.patch(self._url(), {"status": "DELIVERED"}, format="json")

        self.assertEqual(res.status_code, 401)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.PENDING)
        self.assertStock(self.product_a, 5, True)

    def test_anonymous_is_401(self):
        res = self.client.patch(self._url(), {"status": "DELIVERED"}, format="json")

        self.assertEqual(res.status_code, 401)
