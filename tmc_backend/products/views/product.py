# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Public storefront catalog (list / featured / detail)
- Admin product management (create / full update / delete)
- Stock edits from the admin and business dashboards (partial update)

Key rules:
- Buyer tier decides which packs are visible (services.catalog.visible_products).
- Non-admin writes answer 401, like every back-office endpoint.
"""

import logging

from django.db.models import Prefetch
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from products.filters import ProductFilter
from products.models import Product
from products.serializers import ProductSerializer, ProductWriteSerializer
from products.services.catalog import (
    apply_sort,
    featured_products,
    remove_product,
    visible_products,
    with_catalog_stats,
)
from reviews.models import Review
from reviews.serializers import ReviewSerializer
from users.permissions import AdminOnlyMixin, IsAdmin, IsAdminOrBusiness

logger = logging.getLogger(__name__)


class ProductDetailSerializer(ProductSerializer):
    reviews = ReviewSerializer(many=True, read_only=True)

    class Meta(ProductSerializer.Meta):
        fields = ProductSerializer.Meta.fields + ["reviews"]
        read_only_fields = fields


class StockPatchSerializer(serializers.Serializer):
    stock = serializers.IntegerField(min_value=0, required=False)


class ProductViewSet(AdminOnlyMixin, viewsets.ModelViewSet):
    """
    Product endpoints.

    Public:
    - GET /api/products/?search=&category=&productType=&minPrice=&maxPrice=
          &inStockOnly=&minRating=&sortBy=
    - GET /api/products/featured/
    - GET /api/products/<id>/

    Admin:
    - POST /api/products/, PUT /api/products/<id>/, DELETE /api/products/<id>/

    Admin + business:
    - PATCH /api/products/<id>/   ({"stock": n} sets stock_count and in_stock)
    """

    serializer_class = ProductSerializer
    filterset_class = ProductFilter
    lookup_value_regex = "[0-9a-fA-F-]{36}"

    def get_permissions(self):
        if self.action in {"list", "retrieve", "featured"}:
            return [AllowAny()]
        if self.action == "partial_update":
            return [IsAdminOrBusiness()]
        return [IsAdmin()]

    def get_serializer_class(self):
        if self.action in {"create", "update", "partial_update"}:
            return ProductWriteSerializer
        if self.action == "retrieve":
            return ProductDetailSerializer
        return ProductSerializer

    def get_queryset(self):
        qs = Product.objects.select_related("category")

        if self.action == "list":
            qs = visible_products(self.request.user, qs)
            return apply_sort(with_catalog_stats(qs), self.request.query_params.get("sortBy"))

        if self.action == "retrieve":
            return with_catalog_stats(qs).prefetch_related(
                Prefetch(
                    "reviews",
                    queryset=Review.objects.select_related("user", "admin_reply").order_by("-created_at"),
                )
            )

        return qs

    def _read(self, product_id, *, http_status=status.HTTP_200_OK):
        product = with_catalog_stats(Product.objects.select_related("category")).get(id=product_id)
        return Response(ProductSerializer(product).data, status=http_status)

    # -----------------------------
    # Public catalog
    # -----------------------------
    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="sortBy",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="featured (default), price-low, price-high, rating, most-sold, newest",
            ),
        ],
        responses={200: ProductSerializer(many=True)},
        description="Storefront catalog (buyer-tier aware)",
    )
    def list(self, request, *args, **kwargs):
        qs = self.filter_queryset(self.get_queryset())
        return Response(ProductSerializer(qs, many=True).data)

    @extend_schema(
        responses={200: ProductSerializer(many=True)},
        description="In-stock packs: best rated first, then featured, then by name",
    )
    @action(detail=False, methods=["get"], url_path="featured")
    def featured(self, request):
        return Response(ProductSerializer(featured_products(), many=True).data)

    # -----------------------------
    # Admin writes
    # -----------------------------
    @extend_schema(
        request=ProductWriteSerializer,
        responses={201: ProductSerializer, 401: OpenApiResponse(description="Admins only")},
        description="Create a product",
    )
    def create(self, request, *args, **kwargs):
        s = ProductWriteSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        product = s.save()

        logger.info("Product created", extra={"product_id": str(product.id), "name": product.name})
        return self._read(product.id, http_status=status.HTTP_201_CREATED)

    @extend_schema(
        request=ProductWriteSerializer,
        responses={200: ProductSerializer, 400: OpenApiResponse(description="Validation error")},
        description="Replace a product's editable fields",
    )
    def update(self, request, *args, **kwargs):
        if kwargs.get("partial"):
            return self.partial_update(request, *args, **kwargs)

        product = self.get_object()
        s = ProductWriteSerializer(product, data=request.data)
        s.is_valid(raise_exception=True)
        s.save()

        logger.info("Product updated", extra={"product_id": str(product.id)})
        return self._read(product.id)

    @extend_schema(
        request=ProductWriteSerializer,
        responses={200: ProductSerializer},
        description="Partial update; {\"stock\": n} sets stock_count and in_stock = n > 0",
    )
    def partial_update(self, request, *args, **kwargs):
        product = self.get_object()

        data = {key: value for key, value in request.data.items()}
        stock = StockPatchSerializer(data={"stock": data.pop("stock")} if "stock" in data else {})
        stock.is_valid(raise_exception=True)

        if "stock" in stock.validated_data:
            product.set_stock(stock.validated_data["stock"])

        s = ProductWriteSerializer(product, data=data, partial=True)
        s.is_valid(raise_exception=True)
        s.save()

        logger.info(
            "Product patched",
            extra={
                "product_id": str(product.id),
                "stock_count": product.stock_count,
                "in_stock": product.in_stock,
                "actor_id": str(request.user.id),
            },
        )
        return self._read(product.id)

    @extend_schema(
        responses={200: dict, 401: OpenApiResponse(description="Admins only")},
        description="Delete a product, or deactivate it when orders, carts or reviews reference it",
    )
    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        action_taken, deactivated = remove_product(product_id=product.id)

        if action_taken == "deactivated":
            return Response(
                {
                    "message": "Product has been deactivated instead of deleted because it has "
                    "order history, cart items, or reviews.",
                    "product": ProductSerializer(deactivated).data,
                    "action": action_taken,
                }
            )

        return Response({"message": "Product deleted successfully", "action": action_taken})
