# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from .category import Category


class Product(models.Model):
    """
    Represents a sellable marinated-chicken pack.

    STOCK MODEL (IMPORTANT):
    - stock_count lives on the product row (no batches)
    - stock_count only goes DOWN when an order is DELIVERED and only goes
      back UP when a DELIVERED order is CANCELLED, or when an admin restocks
    - stock_count never goes negative
    - in_stock follows stock_count > 0 unless an admin forces it

    BUYER TIERS:
    - user_type=CONSUMER products are visible to everyone
    - user_type=BUSINESS products are visible to approved businesses and admins
    """

    class UserType(models.TextChoices):
        CONSUMER = "CONSUMER", "Consumer"
        BUSINESS = "BUSINESS", "Business"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="products",
    )

    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField()

    price = models.DecimalField(max_digits=10, decimal_places=2)
    original_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
    )

    user_type = models.CharField(
        max_length=16,
        choices=UserType.choices,
        default=UserType.CONSUMER,
        db_index=True,
    )

    size = models.CharField(max_length=64)
    weight = models.CharField(max_length=64, blank=True, default="")

    stock_count = models.PositiveIntegerField(default=0)
    in_stock = models.BooleanField(default=True)

    # Lists of strings
    images = models.JSONField(default=list, blank=True)
    recipes = models.JSONField(default=list, blank=True)
    tags = models.JSONField(default=list, blank=True)

    featured = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["name"], name="product_name_idx"),
            models.Index(fields=["user_type", "in_stock"], name="product_tier_stock_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.size})"

    def clean(self):
        if self.price is None or Decimal(self.price) < 0:
            raise ValidationError("Price cannot be negative")

        if self.original_price is not None and Decimal(self.original_price) < 0:
            raise ValidationError("Original price cannot be negative")

    def set_stock(self, count: int) -> None:
        """
        Explicit restock/adjustment: in_stock follows the new count.
        """
        self.stock_count = max(0, int(count))
        self.in_stock = self.stock_count > 0
