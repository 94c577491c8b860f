# orders/serializers/order.py

from rest_framework import serializers

from orders.models import Order, OrderItem
from products.serializers import ProductSnapshotSerializer
from users.serializers import UserSummarySerializer


class OrderItemSerializer(serializers.ModelSerializer):
    """
    Order line (read-only).
    `price` is the unit price captured at checkout; `product` is the live row.
    """

    product = ProductSnapshotSerializer(read_only=True)
    line_total = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product",
            "quantity",
            "price",
            "line_total",
            "created_at",
        ]
        read_only_fields = fields

    def get_line_total(self, obj) -> str:
        return f"{obj.line_total:.2f}"


class OrderSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "user",
            "status",
            "payment_status",
            "total_amount",
            "shipping_address",
            "notes",
            "items",
            "confirmed_at",
            "shipped_at",
            "delivered_at",
            "cancelled_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


# ---------------- INPUTS ----------------
class PlaceOrderInputSerializer(serializers.Serializer):
    shipping_address = serializers.DictField(required=False, default=dict)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class OrderStatusInputSerializer(serializers.Serializer):
    # Plain string: unknown values are rejected by the lifecycle service
    status = serializers.CharField()


class PaymentStatusInputSerializer(serializers.Serializer):
    payment_status = serializers.CharField()
