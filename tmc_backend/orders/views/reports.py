# orders/views/reports.py

"""
PATH: orders/views/reports.py

ADMIN DASHBOARD + REPORTS

- GET /api/orders/admin/stats/
- GET /api/orders/admin/reports/?range=last7days|last30days|last90days|lastyear
- GET /api/orders/admin/reports/export/?range=...&format=csv

Notes:
- Revenue in the ranged report and the export counts DELIVERED orders only.
- Dashboard revenue is split by payment status instead.
- Money is serialized as fixed 2-decimal strings.
"""

from __future__ import annotations

import csv
from decimal import Decimal

from django.conf import settings
from django.http import HttpResponse
from drf_spectacular.utils import OpenApiParameter, OpenApiTypes, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.api_errors import error_response
from orders.services.reports import (
    DEFAULT_RANGE,
    RANGES,
    daily_rows,
    dashboard_stats,
    range_report,
)
from users.permissions import AdminOnlyMixin

RANGE_PARAMETER = OpenApiParameter(
    name="range",
    type=OpenApiTypes.STR,
    required=False,
    enum=list(RANGES),
    description="Reporting window. Defaults to last30days.",
)


def _money(x) -> str:
    """
    JSON-safe money string.
    """
    if x is None:
        return "0.00"
    if isinstance(x, Decimal):
        return f"{x:.2f}"
    return f"{Decimal(str(x)):.2f}"


def _display_name(email: str | None, first_name: str | None, last_name: str | None) -> str:
    fn = (first_name or "").strip()
    ln = (last_name or "").strip()
    full = f"{fn} {ln}".strip()

    if full:
        return full
    if email:
        return email
    return "Unknown"


def _range_key(request) -> str:
    key = request.query_params.get("range") or DEFAULT_RANGE
    return key if key in RANGES else DEFAULT_RANGE


class AdminStatsView(AdminOnlyMixin, APIView):
    """
    Dashboard headline numbers + the five most recent orders.
    """

    @extend_schema(
        description="Admin dashboard counts, revenue split and recent orders.",
        responses={200: OpenApiTypes.OBJECT},
    )
    def get(self, request):
        stats = dashboard_stats()

        return Response(
            {
                "total_users": stats["total_users"],
                "total_products": stats["total_products"],
                "total_orders": stats["total_orders"],
                "total_revenue": _money(stats["total_revenue"]),
                "pending_revenue": _money(stats["pending_revenue"]),
                "received_revenue": _money(stats["received_revenue"]),
                "delivered_revenue": _money(stats["delivered_revenue"]),
                "pending_businesses": stats["pending_businesses"],
                "recent_orders": [
                    {
                        "id": str(order.id),
                        "order_number": order.order_number,
                        "status": order.status,
                        "payment_status": order.payment_status,
                        "total_amount": _money(order.total_amount),
                        "created_at": order.created_at.isoformat(),
                        "user": {
                            "first_name": order.user.first_name,
                            "last_name": order.user.last_name,
                            "display_name": _display_name(
                                order.user.email,
                                order.user.first_name,
                                order.user.last_name,
                            ),
                        },
                    }
                    for order in stats["recent_orders"]
                ],
            }
        )


class AdminReportView(AdminOnlyMixin, APIView):
    @extend_schema(
        parameters=[RANGE_PARAMETER],
        description="Ranged sales report: top products, orders by status, 6-month revenue.",
        responses={200: OpenApiTypes.OBJECT},
    )
    def get(self, request):
        report = range_report(_range_key(request))

        return Response(
            {
                "range": report["range"],
                "total_users": report["total_users"],
                "total_products": report["total_products"],
                "total_orders": report["total_orders"],
                "total_revenue": _money(report["total_revenue"]),
                "top_products": [
                    {
                        "product_id": str(row["product_id"]),
                        "name": row["name"],
                        "sales": row["sales"],
                        "revenue": _money(row["revenue"]),
                    }
                    for row in report["top_products"]
                ],
                "orders_by_status": report["orders_by_status"],
                "monthly_revenue": [
                    {"month": row["month"], "revenue": _money(row["revenue"])}
                    for row in report["monthly_revenue"]
                ],
            }
        )


class AdminReportExportView(AdminOnlyMixin, APIView):
    """
    Daily CSV export. Only csv is supported; other formats answer 501.
    """

    def perform_content_negotiation(self, request, force=False):
        # ?format= names the export, not a DRF renderer
        return super().perform_content_negotiation(request, force=True)

    @extend_schema(
        parameters=[
            RANGE_PARAMETER,
            OpenApiParameter(
                name="format",
                type=OpenApiTypes.STR,
                required=False,
                description="Export format. Only csv is implemented.",
            ),
        ],
        description="Per-day orders and delivered revenue as CSV.",
        responses={200: OpenApiTypes.BINARY, 501: OpenApiTypes.OBJECT},
    )
    def get(self, request):
        export_format = (request.query_params.get("format") or "csv").lower()
        if export_format != "csv":
            return error_response(
                code="EXPORT_FORMAT_NOT_SUPPORTED",
                message=f"Export format '{export_format}' is not implemented",
                http_status=status.HTTP_501_NOT_IMPLEMENTED,
            )

        range_key = _range_key(request)

        response = HttpResponse(content_type="text/csv")
        response["Content-Disposition"] = f'attachment; filename="tmc-report-{range_key}.csv"'

        writer = csv.writer(response)
        writer.writerow(["Date", "Orders", "Revenue"])
        for row in daily_rows(range_key):
            writer.writerow(
                [
                    row["date"].isoformat(),
                    row["orders"],
                    f"{settings.STORE_CURRENCY} {_money(row['revenue'])}",
                ]
            )

        return response
