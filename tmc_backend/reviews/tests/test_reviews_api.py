from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from orders.models import Order, OrderItem
from products.models import Category, Product
from reviews.models import AdminReply, Review
from reviews.services.reviews import (
    DuplicateReviewError,
    ReviewNotAllowedError,
    create_review,
    review_eligibility,
)

User = get_user_model()


class ReviewFixtureMixin:
    def setUp(self):
        self.client = APIClient()

        self.admin = User.objects.create_user(email="admin@example.com", password="pass123", role=User.Role.ADMIN)
        self.buyer = User.objects.create_user(
            email="buyer@example.com",
            password="pass123",
            first_name="Zara",
            last_name="Ahmed",
        )
        self.stranger = User.objects.create_user(email="stranger@example.com", password="pass123")

        category = Category.objects.create(name="Marinated Chicken")
        self.product = Product.objects.create(
            category=category,
            name="Tikka Boti",
            description="Classic tikka marinade",
            price=Decimal("1200.00"),
            size="1 kg",
            stock_count=5,
        )

        self.order = Order.objects.create(
            user=self.buyer,
            total_amount=Decimal("1200.00"),
            status=Order.Status.DELIVERED,
        )
        OrderItem.objects.create(order=self.order, product=self.product, quantity=1, price=Decimal("1200.00"))


class ReviewServiceTests(ReviewFixtureMixin, TestCase):
    """
    GUARANTEES:
    - Only buyers with a DELIVERED order containing the product may review
    - One review per buyer and product
    """

    def test_delivered_buyer_can_review(self):
        review = create_review(user=self.buyer, product_id=self.product.id, rating=5, comment="Great")

        self.assertEqual(review.rating, 5)
        self.assertEqual(
            review_eligibility(user=self.buyer, product_id=self.product.id),
            {"can_review": False, "has_reviewed": True},
        )

    def test_undelivered_order_does_not_count(self):
        self.order.status = Order.Status.SHIPPED
        self.order.save()

        with self.assertRaises(ReviewNotAllowedError):
            create_review(user=self.buyer, product_id=self.product.id, rating=4)

    def test_duplicate_review(self):
        create_review(user=self.buyer, product_id=self.product.id, rating=4)

        with self.assertRaises(DuplicateReviewError):
            create_review(user=self.buyer, product_id=self.product.id, rating=2)

        self.assertEqual(Review.objects.count(), 1)


class ReviewApiTests(ReviewFixtureMixin, TestCase):
    def test_create_review(self):
        self.client.force_authenticate(self.buyer)

        res = self.client.post(
            "/api/reviews/",
            {"product_id": str(self.product.id), "rating": 5, "comment": "Juicy"},
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["user"]["first_name"], "Zara")
        self.assertIsNone(res.data["admin_reply"])

    def test_stranger_cannot_review(self):
        self.client.force_authenticate(self.stranger)

        res = self.client.post("/api/reviews/", {"product_id": str(self.product.id), "rating": 5}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "REVIEW_NOT_ALLOWED")

    def test_rating_out_of_range(self):
        self.client.force_authenticate(self.buyer)

        res = self.client.post("/api/reviews/", {"product_id": str(self.product.id), "rating": 6}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertIn("rating", res.data)

    def test_duplicate_via_api(self):
        Review.objects.create(user=self.buyer, product=self.product, rating=4)
        self.client.force_authenticate(self.buyer)

        res = self.client.post("/api/reviews/", {"product_id": str(self.product.id), "rating": 5}, format="json")

        self.assertEqual(res.status_code, 400)

    def test_only_owner_edits(self):
        review = Review.objects.create(user=self.buyer, product=self.product, rating=3, comment="Ok")

        self.client.force_authenticate(self.stranger)
        denied = self.client.put(f"/api/reviews/{review.id}/", {"rating": 1, "comment": "Bad"}, format="json")
        self.assertEqual(denied.status_code, 403)

        self.client.force_authenticate(self.buyer)
        res = self.client.put(f"/api/reviews/{review.id}/", {"rating": 4, "comment": "Better"}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["rating"], 4)

    def test_admin_deletes_any_review(self):
        review = Review.objects.create(user=self.buyer, product=self.product, rating=3)

        self.client.force_authenticate(self.stranger)
        self.assertEqual(self.client.delete(f"/api/reviews/{review.id}/").status_code, 403)

        self.client.force_authenticate(self.admin)
        self.assertEqual(self.client.delete(f"/api/reviews/{review.id}/").status_code, 200)
        self.assertFalse(Review.objects.filter(id=review.id).exists())

    def test_can_review(self):
        url = "/api/reviews/can-review/"

        anon = self.client.get(url, {"productId": str(self.product.id)})
        self.assertEqual(anon.data, {"can_review": False, "has_reviewed": False})

        self.client.force_authenticate(self.buyer)
        res = self.client.get(url, {"productId": str(self.product.id)})
        self.assertEqual(res.data, {"can_review": True, "has_reviewed": False})

        self.assertEqual(self.client.get(url).status_code, 400)


class AdminReplyTests(ReviewFixtureMixin, TestCase):
    """
    GUARANTEES:
    - One reply per review: first POST creates (201), later POSTs edit (200)
    - Deleting a missing reply answers 404
    - Only admins write replies (401 otherwise)
    """

    def setUp(self):
        super().setUp()
        self.review = Review.objects.create(user=self.buyer, product=self.product, rating=5)
        self.url = f"/api/reviews/{self.review.id}/reply/"

    def test_create_then_update(self):
        self.client.force_authenticate(self.admin)

        created = self.client.post(self.url, {"comment": "Thank you!"}, format="json")
        updated = self.client.post(self.url, {"comment": "Thanks again!"}, format="json")

        self.assertEqual(created.status_code, 201)
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(AdminReply.objects.get(review=self.review).comment, "Thanks again!")

    def test_reply_is_public(self):
        AdminReply.objects.create(review=self.review, comment="Thank you!")

        res = self.client.get(self.url)

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["reply"]["comment"], "Thank you!")

    def test_delete_missing_reply(self):
        self.client.force_authenticate(self.admin)

        res = self.client.delete(self.url)

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"]["code"], "REPLY_NOT_FOUND")

    def test_buyer_cannot_reply(self):
        self.client.force_authenticate(self.buyer)

        res = self.client.post(self.url, {"comment": "Me too"}, format="json")

        self.assertEqual(res.status_code, 401)
