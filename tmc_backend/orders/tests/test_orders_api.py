from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from cart.models import CartItem
from orders.models import Order, OrderItem
from orders.services.order_placement import EmptyCartError, OutOfStockError, place_order
from products.models import Category, Product

User = get_user_model()


class OrderPlacementTests(TestCase):
    """
    GUARANTEES:
    - The whole cart becomes one PENDING order with price snapshots
    - The cart is emptied, stock is untouched
    - Empty carts and out-of-stock products are rejected without side effects
    """

    def setUp(self):
        self.client = APIClient()
        self.buyer = User.objects.create_user(email="buyer@example.com", password="pass123")

        category = Category.objects.create(name="Marinated Chicken")
        self.tikka = Product.objects.create(
            category=category,
            name="Tikka Boti",
            description="Classic tikka marinade",
            price=Decimal("1200.00"),
            size="1 kg",
            stock_count=5,
        )
        self.malai = Product.objects.create(
            category=category,
            name="Malai Boti",
            description="Creamy malai marinade",
            price=Decimal("1400.00"),
            size="1 kg",
            stock_count=3,
        )

        CartItem.objects.create(user=self.buyer, product=self.tikka, quantity=2)
        CartItem.objects.create(user=self.buyer, product=self.malai, quantity=1)

        self.client.force_authenticate(self.buyer)

    def test_place_order_from_cart(self):
        res = self.client.post(
            "/api/orders/",
            {"shipping_address": {"city": "Lahore"}, "notes": "Ring twice"},
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["status"], "PENDING")
        self.assertEqual(res.data["payment_status"], "PENDING")
        self.assertEqual(Decimal(res.data["total_amount"]), Decimal("3800.00"))
        self.assertEqual(res.data["shipping_address"], {"city": "Lahore"})
        self.assertTrue(res.data["order_number"].startswith("TMC-"))
        self.assertEqual(len(res.data["items"]), 2)

        self.assertFalse(CartItem.objects.filter(user=self.buyer).exists())

        self.tikka.refresh_from_db()
        self.assertEqual(self.tikka.stock_count, 5)

    def test_price_is_snapshotted(self):
        order = place_order(user=self.buyer)

        self.tikka.price = Decimal("1500.00")
        self.tikka.save()

        item = OrderItem.objects.get(order=order, product=self.tikka)
        self.assertEqual(item.price, Decimal("1200.00"))
        self.assertEqual(item.line_total, Decimal("2400.00"))

    def test_empty_cart(self):
        CartItem.objects.filter(user=self.buyer).delete()

        with self.assertRaises(EmptyCartError):
            place_order(user=self.buyer)

        res = self.client.post("/api/orders/", {}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "EMPTY_CART")

    def test_out_of_stock_product_blocks_order(self):
        self.malai.in_stock = False
        self.malai.save()

        with self.assertRaises(OutOfStockError):
            place_order(user=self.buyer)

        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(CartItem.objects.filter(user=self.buyer).count(), 2)

    def test_order_numbers_are_unique(self):
        first = place_order(user=self.buyer)

        CartItem.objects.create(user=self.buyer, product=self.tikka, quantity=1)
        second = place_order(user=self.buyer)

        self.assertNotEqual(first.order_number, second.order_number)


class OrderVisibilityTests(TestCase):
    """
    GUARANTEES:
    - Buyers list and read only their own orders
    - Admins list every order and can filter by status
    """

    def setUp(self):
        self.client = APIClient()

        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="pass123",
            role=User.Role.ADMIN,
        )
        self.alice = User.objects.create_user(email="alice@example.com", password="pass123")
        self.bob = User.objects.create_user(email="bob@example.com", password="pass123")

        self.alice_order = Order.objects.create(user=self.alice, total_amount=Decimal("100.00"))
        self.bob_order = Order.objects.create(
            user=self.bob,
            total_amount=Decimal("200.00"),
            status=Order.Status.SHIPPED,
        )

    def test_buyer_sees_own_orders(self):
        self.client.force_authenticate(self.alice)

        res = self.client.get("/api/orders/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual([o["id"] for o in res.data], [str(self.alice_order.id)])

    def test_admin_sees_all_and_filters(self):
        self.client.force_authenticate(self.admin)

        res = self.client.get("/api/orders/")
        self.assertEqual(len(res.data), 2)

        res = self.client.get("/api/orders/", {"status": "SHIPPED"})
        self.assertEqual([o["id"] for o in res.data], [str(self.bob_order.id)])

    def test_detail_owner_only(self):
        self.client.force_authenticate(self.alice)

        own = self.client.get(f"/api/orders/{self.alice_order.id}/")
        other = self.client.get(f"/api/orders/{self.bob_order.id}/")

        self.assertEqual(own.status_code, 200)
        self.assertEqual(own.data["user"]["email"], "alice@example.com")
        self.assertEqual(other.status_code, 404)

    def test_detail_malformed_id_is_json_404(self):
        self.client.force_authenticate(self.alice)

        res = self.client.get("/api/orders/not-a-real-id/")

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"]["code"], "ORDER_NOT_FOUND")

    def test_admin_reads_any_order(self):
        self.client.force_authenticate(self.admin)

        res = self.client.get(f"/api/orders/{self.bob_order.id}/")

        self.assertEqual(res.status_code, 200)

    def test_anonymous_cannot_list(self):
        res = self.client.get("/api/orders/")

        self.assertEqual(res.status_code, 401)


class PaymentStatusTests(TestCase):
    """
    GUARANTEES:
    - Admins record payment status; status and stock are untouched
    - Unknown payment statuses answer 400, unknown orders 404
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="pass123",
            role=User.Role.ADMIN,
        )
        self.buyer = User.objects.create_user(email="buyer@example.com", password="pass123")
        self.order = Order.objects.create(user=self.buyer, total_amount=Decimal("500.00"))

    def test_admin_marks_paid(self):
        self.client.force_authenticate(self.admin)

        res = self.client.patch(
            f"/api/orders/{self.order.id}/payment/",
            {"payment_status": "PAID"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["payment_status"], "PAID")
        self.assertEqual(res.data["status"], "PENDING")

    def test_invalid_payment_status(self):
        self.client.force_authenticate(self.admin)

        res = self.client.patch(
            f"/api/orders/{self.order.id}/payment/",
            {"payment_status": "SETTLED"},
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "INVALID_PAYMENT_STATUS")

    def test_missing_order(self):
        self.client.force_authenticate(self.admin)

        res = self.client.patch(
            "/api/orders/00000000-0000-0000-0000-000000000000/payment/",
            {"payment_status": "PAID"},
            format="json",
        )

        self.assertEqual(res.status_code, 404)

    def test_malformed_order_id(self):
        self.client.force_authenticate(self.admin)

        res = self.client.patch("/api/orders/not-a-real-id/payment/", {"payment_status": "PAID"}, format="json")

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"]["code"], "ORDER_NOT_FOUND")

    def test_buyer_cannot_mark_paid(self):
        self.client.force_authenticate(self.buyer)

        res = self.client.patch(
            f"/api/orders/{self.order.id}/payment/",
            {"payment_status": "PAID"},
            format="json",
        )

        self.assertEqual(res.status_code, 401)
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PaymentStatus.PENDING)
