from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from products.models import Category, Product
from users.models import Business

User = get_user_model()


CONSUMER_PACKS = [
    ("Consumer Pack - 4 Pieces", "Perfect for small families. All 6 signature recipes included.",
     "12.99", "15.99", "4 pieces", "800g", 50, True),
    ("Consumer Pack - 8 Pieces", "Great for medium families. All 6 signature recipes included.",
     "22.99", "27.99", "8 pieces", "1.6kg", 30, True),
    ("Consumer Pack - 1kg", "Premium quality marinated chicken, 1kg pack.",
     "18.99", "22.99", "1kg", "1kg", 40, False),
    ("Consumer Pack - 2kg", "Value pack for larger families. All recipes included.",
     "34.99", "42.99", "2kg", "2kg", 25, False),
]

BUSINESS_PACKS = [
    ("Business Pack - 5kg", "Bulk pack for restaurants and catering. All 6 signature recipes.",
     "79.99", "99.99", "5kg", "5kg", 20, True),
    ("Business Pack - 10kg", "Large bulk pack for commercial use. Premium quality guaranteed.",
     "149.99", "189.99", "10kg", "10kg", 15, True),
    ("Business Pack - 15kg", "Extra large pack for high-volume businesses.",
     "219.99", "279.99", "15kg", "15kg", 10, False),
    ("Business Pack - 20kg", "Maximum bulk pack for large-scale operations.",
     "289.99", "369.99", "20kg", "20kg", 8, False),
]


class Command(BaseCommand):
    help = "Seed the category, demo accounts and consumer/business packs (idempotent)"

    def _user(self, *, email, password, first_name, last_name, phone, role):
        user = User.objects.filter(email__iexact=email).first()
        if user:
            return user, False
        user = User.objects.create_user(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            role=role,
            is_staff=role == User.Role.ADMIN,
            is_superuser=role == User.Role.ADMIN,
        )
        return user, True

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding store..."))

        # -------------------------------
        # CATEGORY
        # -------------------------------
        category, _ = Category.objects.get_or_create(
            name="Marinated Chicken",
            defaults={
                "description": "Premium marinated chicken with signature recipes",
                "image": "/placeholder.svg?height=200&width=200&query=marinated chicken category",
            },
        )

        # -------------------------------
        # ACCOUNTS
        # -------------------------------
        self._user(
            email="admin@tmc.com",
            password="admin123",
            first_name="Admin",
            last_name="User",
            phone="+1234567890",
            role=User.Role.ADMIN,
        )
        self._user(
            email="consumer@test.com",
            password="consumer123",
            first_name="John",
            last_name="Doe",
            phone="+1234567891",
            role=User.Role.CONSUMER,
        )
        business_user, _ = self._user(
            email="business@test.com",
            password="business123",
            first_name="Jane",
            last_name="Smith",
            phone="+1234567892",
            role=User.Role.BUSINESS,
        )
        Business.objects.get_or_create(
            user=business_user,
            defaults={
                "business_name": "Test Restaurant",
                "business_type": Business.BusinessType.RESTAURANT,
                "address": "123 Business St",
                "city": "Business City",
                "state": "BC",
                "zip_code": "12345",
                "contact_person": "Jane Smith",
                "description": "Test restaurant for bulk orders",
                "status": Business.Status.APPROVED,
            },
        )

        # -------------------------------
        # PRODUCTS
        # -------------------------------
        packs = [(Product.UserType.CONSUMER, p) for p in CONSUMER_PACKS] + [
            (Product.UserType.BUSINESS, p) for p in BUSINESS_PACKS
        ]

        created_count = 0
        for user_type, (name, description, price, original, size, weight, stock, featured) in packs:
            slug = "-".join(name.lower().split())
            _, created = Product.objects.get_or_create(
                name=name,
                defaults={
                    "description": description,
                    "price": Decimal(price),
                    "original_price": Decimal(original),
                    "category": category,
                    "user_type": user_type,
                    "size": size,
                    "weight": weight,
                    "stock_count": stock,
                    "in_stock": True,
                    "featured": featured,
                    "images": [f"/placeholder.svg?height=400&width=400&query={slug}"],
                },
            )
            created_count += int(created)

        self.stdout.write(self.style.SUCCESS(f"Store seeded ({created_count} new products)."))
        self.stdout.write("Admin: admin@tmc.com / admin123")
        self.stdout.write("Consumer: consumer@test.com / consumer123")
        self.stdout.write("Business: business@test.com / business123")
