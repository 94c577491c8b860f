# products/serializers/category.py

from rest_framework import serializers

from products.models import Category


class CategorySerializer(serializers.ModelSerializer):
    """
    Read-only; categories are managed from the Django admin and seed_store.
    """

    class Meta:
        model = Category
        fields = ["id", "name", "description", "image", "created_at"]
        read_only_fields = fields
