# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Admin rules:

- Products are edited directly; stock_count is the restock lever.
- The sync_in_stock_from_count action re-derives in_stock from stock_count
  after bulk edits.
- Order-driven stock changes never happen here; they come from the order
  lifecycle (delivery / cancellation).
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Category, Product


# =====================================================
# CATEGORY
# =====================================================

@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)
    ordering = ("name",)


# =====================================================
# PRODUCT
# =====================================================

@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "category",
        "user_type",
        "size",
        "price",
        "stock_count",
        "in_stock",
        "featured",
        "created_at",
    )
    list_filter = ("user_type", "in_stock", "featured", "category", "created_at")
    search_fields = ("name", "description")
    ordering = ("-created_at",)
    readonly_fields = ("created_at", "updated_at")
    actions = ["sync_in_stock_from_count"]

    @admin.action(description="Set in_stock from stock_count")
    def sync_in_stock_from_count(self, request, queryset):
        updated = 0
        for product in queryset:
            product.set_stock(product.stock_count)
            product.save(update_fields=["stock_count", "in_stock", "updated_at"])
            updated += 1
        self.message_user(request, f"{updated} product(s) updated.")
