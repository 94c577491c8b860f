from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from orders.models import Order, OrderItem
from products.models import Category, Product
from reviews.models import Review
from users.models import Business

User = get_user_model()


def _business_user(email, status):
    user = User.objects.create_user(email=email, password="pass123", role=User.Role.BUSINESS)
    Business.objects.create(
        user=user,
        business_name="Grill House",
        business_type=Business.BusinessType.RESTAURANT,
        address="12 Main Boulevard",
        city="Lahore",
        state="Punjab",
        zip_code="54000",
        contact_person="Bilal",
        status=status,
    )
    return user


class CatalogFixtureMixin:
    def setUp(self):
        self.client = APIClient()
        self.category = Category.objects.create(name="Marinated Chicken")

        self.tikka = Product.objects.create(
            category=self.category,
            name="Tikka Boti",
            description="Classic tikka marinade",
            price=Decimal("1200.00"),
            size="1 kg",
            stock_count=5,
            tags=["spicy", "bbq"],
        )
        self.malai = Product.objects.create(
            category=self.category,
            name="Malai Boti",
            description="Creamy and mild",
            price=Decimal("1400.00"),
            size="1 kg",
            stock_count=0,
            in_stock=False,
            featured=True,
        )
        self.bulk = Product.objects.create(
            category=self.category,
            name="Bulk Tikka",
            description="Restaurant pack",
            price=Decimal("9000.00"),
            size="10 kg",
            stock_count=20,
            user_type=Product.UserType.BUSINESS,
        )

    def _names(self, res):
        return sorted(p["name"] for p in res.data)


class CatalogVisibilityTests(CatalogFixtureMixin, TestCase):
    """
    GUARANTEES:
    - Anonymous, consumers and unapproved businesses see CONSUMER packs only
    - Approved businesses and admins also see BUSINESS packs
    """

    def test_anonymous_sees_consumer_packs(self):
        res = self.client.get("/api/products/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(self._names(res), ["Malai Boti", "Tikka Boti"])

    def test_pending_business_sees_consumer_packs(self):
        self.client.force_authenticate(_business_user("pending@example.com", Business.Status.PENDING))

        res = self.client.get("/api/products/")

        self.assertNotIn("Bulk Tikka", self._names(res))

    def test_approved_business_sees_business_packs(self):
        self.client.force_authenticate(_business_user("approved@example.com", Business.Status.APPROVED))

        res = self.client.get("/api/products/")

        self.assertIn("Bulk Tikka", self._names(res))

    def test_admin_sees_everything(self):
        admin = User.objects.create_user(email="admin@example.com", password="pass123", role=User.Role.ADMIN)
        self.client.force_authenticate(admin)

        res = self.client.get("/api/products/")

        self.assertEqual(len(res.data), 3)


class CatalogFilterTests(CatalogFixtureMixin, TestCase):
    def test_search_matches_name_description_and_tags(self):
        self.assertEqual(self._names(self.client.get("/api/products/", {"search": "malai"})), ["Malai Boti"])
        self.assertEqual(self._names(self.client.get("/api/products/", {"search": "creamy"})), ["Malai Boti"])
        self.assertEqual(self._names(self.client.get("/api/products/", {"search": "bbq"})), ["Tikka Boti"])

    def test_price_range(self):
        res = self.client.get("/api/products/", {"minPrice": "1300", "maxPrice": "1500"})

        self.assertEqual(self._names(res), ["Malai Boti"])

    def test_in_stock_only(self):
        res = self.client.get("/api/products/", {"inStockOnly": "true"})

        self.assertEqual(self._names(res), ["Tikka Boti"])

    def test_min_rating(self):
        buyer = User.objects.create_user(email="buyer@example.com", password="pass123")
        other = User.objects.create_user(email="other@example.com", password="pass123")
        Review.objects.create(user=buyer, product=self.tikka, rating=5)
        Review.objects.create(user=other, product=self.tikka, rating=4)

        res = self.client.get("/api/products/", {"minRating": "4.5"})

        self.assertEqual(self._names(res), ["Tikka Boti"])
        self.assertEqual(res.data[0]["average_rating"], 4.5)
        self.assertEqual(res.data[0]["review_count"], 2)

    def test_category_filter(self):
        other = Category.objects.create(name="Sauces")

        res = self.client.get("/api/products/", {"category": str(other.id)})

        self.assertEqual(res.data, [])

    def test_sort_by_price(self):
        low = self.client.get("/api/products/", {"sortBy": "price-low"})
        high = self.client.get("/api/products/", {"sortBy": "price-high"})

        self.assertEqual([p["name"] for p in low.data], ["Tikka Boti", "Malai Boti"])
        self.assertEqual([p["name"] for p in high.data], ["Malai Boti", "Tikka Boti"])

    def test_sort_by_most_sold(self):
        buyer = User.objects.create_user(email="buyer@example.com", password="pass123")
        order = Order.objects.create(user=buyer, total_amount=Decimal("1400.00"))
        OrderItem.objects.create(order=order, product=self.malai, quantity=1, price=Decimal("1400.00"))

        res = self.client.get("/api/products/", {"sortBy": "most-sold"})

        self.assertEqual(res.data[0]["name"], "Malai Boti")
        self.assertEqual(res.data[0]["sales_count"], 1)


class FeaturedShelfTests(CatalogFixtureMixin, TestCase):
    """
    GUARANTEES:
    - Only in-stock packs
    - Rated packs first (best first), then featured, then by name
    """

    def test_featured_order(self):
        plain = Product.objects.create(
            category=self.category,
            name="Achari Boti",
            description="Pickle spices",
            price=Decimal("1100.00"),
            size="1 kg",
            stock_count=4,
        )
        starred = Product.objects.create(
            category=self.category,
            name="Zafrani Boti",
            description="Saffron",
            price=Decimal("1500.00"),
            size="1 kg",
            stock_count=4,
            featured=True,
        )
        buyer = User.objects.create_user(email="buyer@example.com", password="pass123")
        Review.objects.create(user=buyer, product=self.tikka, rating=3)

        res = self.client.get("/api/products/featured/")

        self.assertEqual(res.status_code, 200)
        names = [p["name"] for p in res.data]
        self.assertEqual(names[:3], ["Tikka Boti", starred.name, "Achari Boti"])
        self.assertNotIn("Malai Boti", names)
        self.assertIn(plain.name, names)


class ProductDetailTests(CatalogFixtureMixin, TestCase):
    def test_detail_includes_reviews(self):
        buyer = User.objects.create_user(
            email="buyer@example.com",
            password="pass123",
            first_name="Nida",
        )
        Review.objects.create(user=buyer, product=self.tikka, rating=4, comment="Juicy")

        res = self.client.get(f"/api/products/{self.tikka.id}/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["category"]["name"], "Marinated Chicken")
        self.assertEqual(len(res.data["reviews"]), 1)
        self.assertEqual(res.data["reviews"][0]["comment"], "Juicy")

    def test_unknown_product_404(self):
        res = self.client.get("/api/products/00000000-0000-0000-0000-000000000000/")

        self.assertEqual(res.status_code, 404)

    def test_categories_are_public(self):
        res = self.client.get("/api/products/categories/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual([c["name"] for c in res.data], ["Marinated Chicken"])
