"""
PATH: cart/serializers/cart_item.py

CART ITEM SERIALIZERS

- CartItemSerializer: line with the product card (and its category)
- AddCartItemInputSerializer / UpdateCartItemInputSerializer: write inputs
"""

from rest_framework import serializers

from cart.models import CartItem
from products.serializers import CategorySerializer, ProductSnapshotSerializer


class CartProductSerializer(ProductSnapshotSerializer):
    category = CategorySerializer(read_only=True)

    class Meta(ProductSnapshotSerializer.Meta):
        fields = ProductSnapshotSerializer.Meta.fields + ["original_price", "category"]
        read_only_fields = fields


class CartItemSerializer(serializers.ModelSerializer):
    product = CartProductSerializer(read_only=True)

    line_total = serializers.SerializerMethodField()

    class Meta:
        model = CartItem
        fields = [
            "id",
            "product",
            "quantity",
            "line_total",
            "created_at",
        ]
        read_only_fields = fields

    def get_line_total(self, obj) -> str:
        return f"{obj.product.price * obj.quantity:.2f}"


class AddCartItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class UpdateCartItemInputSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
