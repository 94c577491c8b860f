# products/views/category.py

from drf_spectacular.utils import extend_schema
from rest_framework import viewsets
from rest_framework.permissions import AllowAny

from products.models import Category
from products.serializers.category import CategorySerializer


class CategoryViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Category API

    Policy:
    - Anyone can READ categories (storefront filters + admin product form)
    - Categories are created from the Django admin / seed command
    """

    queryset = Category.objects.all().order_by("name")
    serializer_class = CategorySerializer
    permission_classes = [AllowAny]
    pagination_class = None

    @extend_schema(description="All catalog categories, by name")
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)
