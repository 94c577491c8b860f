# products/serializers/product.py

"""
PRODUCT SERIALIZERS

Purpose:
- ProductSerializer: storefront card (with rating / sales annotations)
- ProductSnapshotSerializer: compact product shape embedded in cart and order items
- ProductWriteSerializer: admin create / full update / partial update

Write rules:
- price and stock_count are non-negative
- category must exist
- tags may arrive as "a, b, c" and recipes as newline separated text
"""

from rest_framework import serializers

from products.models import Category, Product
from products.serializers.category import CategorySerializer


class DelimitedListField(serializers.ListField):
    """
    List of strings that also accepts a single delimited string.
    """

    def __init__(self, *, delimiter=",", **kwargs):
        self.delimiter = delimiter
        kwargs.setdefault("child", serializers.CharField(allow_blank=False))
        kwargs.setdefault("required", False)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = [part.strip() for part in data.split(self.delimiter)]
            data = [part for part in data if part]
        return super().to_internal_value(data)


class ProductSnapshotSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "price",
            "size",
            "weight",
            "images",
            "user_type",
            "stock_count",
            "in_stock",
        ]
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    """
    Canonical storefront product.

    average_rating / review_count / sales_count come from
    services.catalog.with_catalog_stats() when the queryset is annotated,
    and are computed per row otherwise.
    """

    category = CategorySerializer(read_only=True)

    average_rating = serializers.SerializerMethodField()
    review_count = serializers.SerializerMethodField()
    sales_count = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "original_price",
            "category",
            "user_type",
            "size",
            "weight",
            "stock_count",
            "in_stock",
            "images",
            "recipes",
            "tags",
            "featured",
            "average_rating",
            "review_count",
            "sales_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_average_rating(self, obj) -> float:
        raw = getattr(obj, "average_rating", None)
        if raw is None:
            ratings = [r.rating for r in obj.reviews.all()]
            raw = sum(ratings) / len(ratings) if ratings else 0
        return round(float(raw), 1)

    def get_review_count(self, obj) -> int:
        annotated = getattr(obj, "review_count", None)
        if annotated is not None:
            return int(annotated)
        return obj.reviews.count()

    def get_sales_count(self, obj) -> int:
        annotated = getattr(obj, "sales_count", None)
        if annotated is not None:
            return int(annotated)
        return obj.order_items.count()


class ProductWriteSerializer(serializers.ModelSerializer):
    category_id = serializers.PrimaryKeyRelatedField(
        source="category",
        queryset=Category.objects.all(),
        error_messages={
            "does_not_exist": "Invalid category selected. Please choose a valid category.",
        },
    )
    tags = DelimitedListField(delimiter=",")
    recipes = DelimitedListField(delimiter="\n")
    images = serializers.ListField(child=serializers.CharField(), required=False)
    stock_count = serializers.IntegerField(min_value=0, required=False)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    original_price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=0,
        required=False,
        allow_null=True,
    )

    class Meta:
        model = Product
        fields = [
            "name",
            "description",
            "price",
            "original_price",
            "category_id",
            "user_type",
            "size",
            "weight",
            "stock_count",
            "in_stock",
            "images",
            "recipes",
            "tags",
            "featured",
        ]
        extra_kwargs = {
            "weight": {"required": False, "allow_blank": True},
            "in_stock": {"required": False},
            "featured": {"required": False},
            "user_type": {"required": False},
        }

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("name is required")
        return value
