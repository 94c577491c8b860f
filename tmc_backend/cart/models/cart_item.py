# cart/models/cart_item.py

"""
CART ITEM MODEL

Purpose:
- Server-side storefront cart: one row per (buyer, product).
- Price is NOT snapshotted here; it is taken from the product at checkout.

Rules:
- One line per product per buyer (DB constraint).
- Quantity must be > 0.
"""

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from products.models import Product


class CartItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cart_items",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="cart_items",
    )

    quantity = models.PositiveIntegerField(default=1, help_text="Must be greater than zero")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "product"],
                name="unique_product_per_user_cart",
            )
        ]

    def clean(self):
        if self.quantity is None or int(self.quantity) <= 0:
            raise ValidationError({"quantity": "Quantity must be greater than zero"})

    def __str__(self):
        return f"{getattr(self.product, 'name', 'Product')} x {self.quantity}"
