# cart/views/api.py

"""
CART API VIEWS

Purpose:
- Per-buyer server-side cart for the storefront
- Add (increments an existing line), set quantity, remove, count

Hard rules:
- A buyer only ever sees or edits their own lines.
- Out-of-stock products cannot be added.
- Prices are read from the product at checkout, not stored on the line.
"""

from __future__ import annotations

from django.db import transaction
from django.db.models import F, Sum
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import serializers, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.api_errors import error_response
from cart.models import CartItem
from cart.serializers import (
    AddCartItemInputSerializer,
    CartItemSerializer,
    UpdateCartItemInputSerializer,
)
from products.models import Product


class CartCountSerializer(serializers.Serializer):
    count = serializers.IntegerField()


# =====================================================
# HELPERS
# =====================================================

def _cart_lines(user):
    return (
        CartItem.objects.filter(user=user)
        .select_related("product", "product__category")
        .order_by("-created_at")
    )


# =====================================================
# CART API VIEWS
# =====================================================

class CartView(APIView):
    """
    GET  /api/cart/   the buyer's lines, newest first
    POST /api/cart/   add a product (increments quantity if already in the cart)
    """

    permission_classes = [IsAuthenticated]
    serializer_class = CartItemSerializer

    @extend_schema(
        responses={200: CartItemSerializer(many=True)},
        description="List the authenticated buyer's cart",
    )
    def get(self, request):
        return Response(CartItemSerializer(_cart_lines(request.user), many=True).data)

    @extend_schema(
        request=AddCartItemInputSerializer,
        responses={
            201: CartItemSerializer,
            400: OpenApiResponse(description="Product is out of stock"),
            404: OpenApiResponse(description="Product not found"),
        },
        description="Add a product to the cart (increments quantity if it is already there)",
    )
    @transaction.atomic
    def post(self, request):
        serializer = AddCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = get_object_or_404(Product, id=serializer.validated_data["product_id"])
        quantity = int(serializer.validated_data["quantity"])

        if not product.in_stock:
            return error_response(
                code="OUT_OF_STOCK",
                message="Product is out of stock",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        cart_item, created = CartItem.objects.select_for_update().get_or_create(
            user=request.user,
            product=product,
            defaults={"quantity": quantity},
        )

        if not created:
            CartItem.objects.filter(id=cart_item.id).update(quantity=F("quantity") + quantity)
            cart_item.refresh_from_db(fields=["quantity"])

        return Response(CartItemSerializer(cart_item).data, status=status.HTTP_201_CREATED)


class CartItemView(APIView):
    """
    PUT    /api/cart/<id>/   set quantity (>= 1)
    DELETE /api/cart/<id>/   remove the line
    """

    permission_classes = [IsAuthenticated]
    serializer_class = CartItemSerializer

    @extend_schema(
        request=UpdateCartItemInputSerializer,
        responses={200: CartItemSerializer},
        description="Set the quantity of one of your cart lines",
    )
    @transaction.atomic
    def put(self, request, item_id):
        serializer = UpdateCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart_item = get_object_or_404(
            CartItem.objects.select_for_update().select_related("product", "product__category"),
            id=item_id,
            user=request.user,
        )

        cart_item.quantity = int(serializer.validated_data["quantity"])
        cart_item.save(update_fields=["quantity"])

        return Response(CartItemSerializer(cart_item).data, status=status.HTTP_200_OK)

    @extend_schema(
        request=None,
        responses={200: dict},
        description="Remove one of your cart lines",
    )
    def delete(self, request, item_id):
        cart_item = get_object_or_404(CartItem, id=item_id, user=request.user)
        cart_item.delete()
        return Response({"message": "Item removed from cart"}, status=status.HTTP_200_OK)


class CartCountView(APIView):
    """
    Navbar badge: total units in the cart (0 for anonymous visitors).
    """

    permission_classes = [AllowAny]
    serializer_class = CartCountSerializer

    @extend_schema(responses={200: CartCountSerializer}, description="Total quantity in the cart")
    def get(self, request):
        if not request.user.is_authenticated:
            return Response({"count": 0})

        total = CartItem.objects.filter(user=request.user).aggregate(total=Sum("quantity"))["total"]
        return Response({"count": int(total or 0)})
