from django.contrib import admin

from .models import CartItem

# =====================================================
# CART ITEM ADMIN (READ-ONLY: buyers own their carts)
# =====================================================


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user",
        "product",
        "quantity",
        "created_at",
    )

    readonly_fields = (
        "id",
        "user",
        "product",
        "quantity",
        "created_at",
    )

    search_fields = ("user__email", "product__name")
    list_filter = ("created_at",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
