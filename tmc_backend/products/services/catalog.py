# products/services/catalog.py

"""
======================================================
PATH: products/services/catalog.py
======================================================
CATALOG SERVICES

Purpose:
- Buyer-tier visibility (who may see BUSINESS packs).
- Rating / sales annotations shared by list, featured and detail.
- Sorting for the storefront grid and the featured shelf.
- Safe product removal (deactivate when referenced).

Rules:
- Anonymous, consumers and not-yet-approved businesses see CONSUMER packs only.
- Approved businesses and admins see everything.
- Admin stock edits go through Product.set_stock() so in_stock follows the count.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import Avg, Count, FloatField, QuerySet, Value
from django.db.models.functions import Coalesce

from products.models import Product

logger = logging.getLogger(__name__)


SORT_FEATURED = "featured"
SORT_PRICE_LOW = "price-low"
SORT_PRICE_HIGH = "price-high"
SORT_RATING = "rating"
SORT_MOST_SOLD = "most-sold"
SORT_NEWEST = "newest"

SORT_ORDERINGS = {
    SORT_FEATURED: ("-featured", "-created_at"),
    SORT_PRICE_LOW: ("price",),
    SORT_PRICE_HIGH: ("-price",),
    SORT_RATING: ("-review_count", "-created_at"),
    SORT_MOST_SOLD: ("-sales_count", "-created_at"),
    SORT_NEWEST: ("-created_at",),
}


# ============================================================
# VISIBILITY
# ============================================================


def can_see_business_products(user) -> bool:
    if not user or not user.is_authenticated:
        return False
    if getattr(user, "is_admin", False):
        return True
    return bool(getattr(user, "is_approved_business", False))


def visible_products(user, qs: QuerySet | None = None) -> QuerySet:
    qs = Product.objects.all() if qs is None else qs
    if can_see_business_products(user):
        return qs
    return qs.filter(user_type=Product.UserType.CONSUMER)


# ============================================================
# ANNOTATIONS
# ============================================================


def with_catalog_stats(qs: QuerySet) -> QuerySet:
    """
    average_rating (raw mean, 0 when unrated), review_count, sales_count.
    Serializers round the rating to one decimal.
    """
    return qs.annotate(
        average_rating=Coalesce(Avg("reviews__rating"), Value(0.0), output_field=FloatField()),
        review_count=Count("reviews", distinct=True),
        sales_count=Count("order_items", distinct=True),
    )


def apply_sort(qs: QuerySet, sort_by: str | None) -> QuerySet:
    ordering = SORT_ORDERINGS.get((sort_by or SORT_FEATURED).strip(), SORT_ORDERINGS[SORT_FEATURED])
    return qs.order_by(*ordering)


def featured_products() -> list[Product]:
    """
    In-stock shelf: rated products first (best rating first), then unrated
    ones with featured packs first, ties broken by name.
    """
    products = list(with_catalog_stats(Product.objects.filter(in_stock=True).select_related("category")))

    def sort_key(p):
        rating = float(p.average_rating or 0)
        if rating > 0:
            return (0, -rating, "")
        return (1, 0 if p.featured else 1, p.name.lower())

    products.sort(key=sort_key)
    return products


# ============================================================
# ADMIN MUTATIONS
# ============================================================


def has_history(product: Product) -> bool:
    return (
        product.order_items.exists()
        or product.cart_items.exists()
        or product.reviews.exists()
    )


@transaction.atomic
def remove_product(*, product_id) -> tuple[str, Product | None]:
    """
    Delete a product, or deactivate it when orders, carts or reviews
    still reference it.

    Returns ("deleted", None) or ("deactivated", product).
    """
    product = Product.objects.select_for_update().get(id=product_id)

    if has_history(product):
        product.in_stock = False
        product.stock_count = 0
        product.featured = False
        product.save(update_fields=["in_stock", "stock_count", "featured", "updated_at"])
        logger.info("Product deactivated", extra={"product_id": str(product.id)})
        return "deactivated", product

    product.delete()
    logger.info("Product deleted", extra={"product_id": str(product_id)})
    return "deleted", None
