# orders/views/orders.py

"""
ORDER ENDPOINTS

- GET   /api/orders/?status=          admin: every order, others: own orders
- POST  /api/orders/                  place an order from the caller's cart
- GET   /api/orders/<id>/             owner or admin
- PATCH /api/orders/<id>/status/      admin: lifecycle transition (+ stock reconciliation)
- PATCH /api/orders/<id>/payment/     admin: payment status
"""

import logging

from django.db.models import Prefetch
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.api_errors import error_response
from orders.models import Order, OrderItem
from orders.serializers import (
    OrderSerializer,
    OrderStatusInputSerializer,
    PaymentStatusInputSerializer,
    PlaceOrderInputSerializer,
)
from orders.services.order_lifecycle import (
    InvalidOrderStatusError,
    OrderNotFoundError,
    parse_order_id,
    transition_status,
)
from orders.services.order_placement import (
    EmptyCartError,
    OutOfStockError,
    place_order,
)
from orders.services.payments import InvalidPaymentStatusError, update_payment_status
from users.models import User
from users.permissions import AdminOnlyMixin

logger = logging.getLogger(__name__)


def _orders_queryset():
    return Order.objects.select_related("user").prefetch_related(
        Prefetch(
            "items",
            queryset=OrderItem.objects.select_related("product").order_by("created_at"),
        )
    )


def _is_admin(user) -> bool:
    return getattr(user, "role", None) == User.Role.ADMIN


class OrderListCreateView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="status",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter by order status",
            ),
        ],
        responses={200: OrderSerializer(many=True)},
        description="Admins see every order; everyone else sees their own",
    )
    def get(self, request):
        qs = _orders_queryset().order_by("-created_at")

        if not _is_admin(request.user):
            qs = qs.filter(user=request.user)

        status_filter = request.query_params.get("status")
        if status_filter:
            qs = qs.filter(status=status_filter)

        return Response(OrderSerializer(qs, many=True).data)

    @extend_schema(
        request=PlaceOrderInputSerializer,
        responses={
            201: OrderSerializer,
            400: OpenApiResponse(description="Empty cart or out-of-stock product"),
        },
        description="Turn the caller's cart into a PENDING order",
    )
    def post(self, request):
        s = PlaceOrderInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            order = place_order(
                user=request.user,
                shipping_address=s.validated_data.get("shipping_address") or {},
                notes=s.validated_data.get("notes", ""),
            )
        except EmptyCartError as exc:
            return error_response(
                code="EMPTY_CART",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        except OutOfStockError as exc:
            return error_response(
                code="OUT_OF_STOCK",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        responses={200: OrderSerializer, 404: OpenApiResponse(description="Not found")},
        description="Order detail (owner or admin)",
    )
    def get(self, request, order_id):
        try:
            order = _orders_queryset().filter(id=parse_order_id(order_id)).first()
        except OrderNotFoundError:
            order = None

        # Other buyers' orders are reported as missing
        if order is None or (order.user_id != request.user.id and not _is_admin(request.user)):
            return error_response(
                code="ORDER_NOT_FOUND",
                message="Order not found",
                http_status=status.HTTP_404_NOT_FOUND,
            )

        return Response(OrderSerializer(order).data)


class OrderStatusView(AdminOnlyMixin, APIView):
    """
    ADMIN STATUS TRANSITION

    GUARANTEES:
    - Unknown status values are rejected before anything is read or written (400)
    - Moving to DELIVERED decrements stock once per order (floored at 0)
    - DELIVERED -> CANCELLED restores stock
    - Failures inside the transaction leave status, timestamps and stock unchanged (500)
    """

    @extend_schema(
        request=OrderStatusInputSerializer,
        responses={
            200: OrderSerializer,
            400: OpenApiResponse(description="Invalid status"),
            401: OpenApiResponse(description="Admins only"),
            500: OpenApiResponse(description="Order missing or transaction failed"),
        },
        description="Move an order to a new status and reconcile product stock",
    )
    def patch(self, request, order_id):
        s = OrderStatusInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            order = transition_status(order_id=order_id, target_status=s.validated_data["status"])
        except InvalidOrderStatusError as exc:
            logger.warning(
                "Rejected order status",
                extra={"order_id": str(order_id), "target_status": s.validated_data["status"]},
            )
            return error_response(
                code="INVALID_STATUS",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        except OrderNotFoundError as exc:
            logger.warning("Order status change for missing order", extra={"order_id": str(order_id)})
            return error_response(
                code="ORDER_NOT_FOUND",
                message=str(exc),
                http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        except Exception as exc:
            logger.exception(
                "Order status transition failed",
                extra={"order_id": str(order_id), "target_status": s.validated_data["status"]},
            )
            return error_response(
                code="ORDER_STATUS_UPDATE_FAILED",
                message=str(exc) or "Failed to update order status",
                http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(OrderSerializer(order).data)


class OrderPaymentView(AdminOnlyMixin, APIView):
    @extend_schema(
        request=PaymentStatusInputSerializer,
        responses={
            200: OrderSerializer,
            400: OpenApiResponse(description="Invalid payment status"),
            404: OpenApiResponse(description="Order not found"),
        },
        description="Record an order's payment status",
    )
    def patch(self, request, order_id):
        s = PaymentStatusInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            order = update_payment_status(
                order_id=order_id,
                payment_status=s.validated_data["payment_status"],
            )
        except InvalidPaymentStatusError as exc:
            return error_response(
                code="INVALID_PAYMENT_STATUS",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        except OrderNotFoundError as exc:
            return error_response(
                code="ORDER_NOT_FOUND",
                message=str(exc),
                http_status=status.HTTP_404_NOT_FOUND,
            )

        return Response(OrderSerializer(order).data)
