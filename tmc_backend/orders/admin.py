# orders/admin.py

from django.contrib import admin

from orders.models import Order, OrderItem
from orders.services.order_lifecycle import transition_status
from orders.services.payments import update_payment_status


# ======================================================
# ORDER ITEMS (READ-ONLY INLINE)
# ======================================================


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    fields = ("product", "quantity", "price", "created_at")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


# ======================================================
# ORDER ADMIN
# ======================================================


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Status and payment status edits are routed through their services so the
    admin site reconciles stock and logs exactly like the API does.
    """

    list_display = (
        "order_number",
        "user",
        "status",
        "payment_status",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "payment_status", "created_at")
    search_fields = ("order_number", "user__email")
    inlines = [OrderItemInline]
    readonly_fields = (
        "order_number",
        "user",
        "total_amount",
        "confirmed_at",
        "shipped_at",
        "delivered_at",
        "cancelled_at",
        "created_at",
        "updated_at",
    )

    def has_add_permission(self, request):
        # Orders are placed from a cart
        return False

    def save_model(self, request, obj, form, change):
        changed = set(form.changed_data) if change else set()
        target_status = obj.status
        target_payment_status = obj.payment_status

        # Status and payment status are only written by their services
        if "status" in changed:
            obj.status = form.initial["status"]
        if "payment_status" in changed:
            obj.payment_status = form.initial["payment_status"]

        super().save_model(request, obj, form, change)

        if "status" in changed:
            transition_status(order_id=obj.pk, target_status=target_status)
        if "payment_status" in changed:
            update_payment_status(order_id=obj.pk, payment_status=target_payment_status)
        if changed & {"status", "payment_status"}:
            obj.refresh_from_db()
