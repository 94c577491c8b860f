"""
======================================================
PATH: orders/services/reports.py
======================================================
ADMIN REPORTS

- dashboard_stats(): headline counts + revenue split by payment state
- range_report(range_key): counts, top products, orders by status,
  6-month delivered revenue
- daily_rows(range_key): per-day orders + delivered revenue (CSV export)

Money is returned as Decimal; views format it.
"""

from __future__ import annotations

import calendar
from collections import OrderedDict
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db.models import Count, DecimalField, ExpressionWrapper, F, Sum
from django.utils import timezone

from orders.models import Order, OrderItem
from products.models import Product
from users.models import Business

User = get_user_model()

ZERO = Decimal("0.00")

RANGE_LAST_7_DAYS = "last7days"
RANGE_LAST_30_DAYS = "last30days"
RANGE_LAST_90_DAYS = "last90days"
RANGE_LAST_YEAR = "lastyear"

RANGES = (RANGE_LAST_7_DAYS, RANGE_LAST_30_DAYS, RANGE_LAST_90_DAYS, RANGE_LAST_YEAR)
DEFAULT_RANGE = RANGE_LAST_30_DAYS


# ============================================================
# HELPERS
# ============================================================


def _sum_total(qs) -> Decimal:
    return qs.aggregate(total=Sum("total_amount"))["total"] or ZERO


def _shift_months(d: date, months: int) -> date:
    """
    First day of the month `months` away from d's month.
    """
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def _aware(d: date) -> datetime:
    return timezone.make_aware(datetime.combine(d, time.min), timezone.get_current_timezone())


def range_start(range_key: str | None, *, now: datetime | None = None) -> datetime:
    """
    Start of the reporting window; unknown keys fall back to the last 30 days.
    """
    now = now or timezone.now()
    key = range_key if range_key in RANGES else DEFAULT_RANGE

    if key == RANGE_LAST_7_DAYS:
        return now - timedelta(days=7)
    if key == RANGE_LAST_90_DAYS:
        return now - timedelta(days=90)
    if key == RANGE_LAST_YEAR:
        day = min(now.day, calendar.monthrange(now.year - 1, now.month)[1])
        return now.replace(year=now.year - 1, day=day)
    return now - timedelta(days=30)


# ============================================================
# DASHBOARD
# ============================================================


def dashboard_stats() -> dict:
    orders = Order.objects.all()

    return {
        "total_users": User.objects.count(),
        "total_products": Product.objects.count(),
        "total_orders": orders.count(),
        "total_revenue": _sum_total(orders),
        "pending_revenue": _sum_total(orders.filter(payment_status=Order.PaymentStatus.PENDING)),
        "received_revenue": _sum_total(orders.filter(payment_status=Order.PaymentStatus.PAID)),
        "delivered_revenue": _sum_total(
            orders.filter(
                status=Order.Status.DELIVERED,
                payment_status=Order.PaymentStatus.PAID,
            )
        ),
        "pending_businesses": Business.objects.filter(status=Business.Status.PENDING).count(),
        "recent_orders": list(orders.select_related("user").order_by("-created_at")[:5]),
    }


# ============================================================
# RANGED REPORT
# ============================================================


def top_products(start: datetime, *, limit: int = 5) -> list[dict]:
    line_total = ExpressionWrapper(
        F("price") * F("quantity"),
        output_field=DecimalField(max_digits=14, decimal_places=2),
    )
    rows = (
        OrderItem.objects.filter(order__created_at__gte=start)
        .values("product_id", "product__name")
        .annotate(sales=Sum("quantity"), revenue=Sum(line_total))
        .order_by("-sales", "product__name")[:limit]
    )
    return [
        {
            "product_id": row["product_id"],
            "name": row["product__name"] or "Unknown Product",
            "sales": int(row["sales"] or 0),
            "revenue": Decimal(row["revenue"] or ZERO).quantize(Decimal("0.01")),
        }
        for row in rows
    ]


def monthly_delivered_revenue(*, months: int = 6, today: date | None = None) -> list[dict]:
    today = today or timezone.localdate()
    this_month = today.replace(day=1)

    out = []
    for offset in range(months - 1, -1, -1):
        start = _shift_months(this_month, -offset)
        end = _shift_months(start, 1)
        revenue = _sum_total(
            Order.objects.filter(
                status=Order.Status.DELIVERED,
                created_at__gte=_aware(start),
                created_at__lt=_aware(end),
            )
        )
        out.append({"month": start.strftime("%b %Y"), "revenue": revenue})
    return out


def range_report(range_key: str | None) -> dict:
    start = range_start(range_key)
    in_range = Order.objects.filter(created_at__gte=start)

    by_status = (
        in_range.values("status").annotate(count=Count("id")).order_by("status")
    )

    return {
        "range": range_key if range_key in RANGES else DEFAULT_RANGE,
        "total_users": User.objects.count(),
        "total_products": Product.objects.count(),
        "total_orders": in_range.count(),
        "total_revenue": _sum_total(in_range.filter(status=Order.Status.DELIVERED)),
        "top_products": top_products(start),
        "orders_by_status": [{"status": row["status"], "count": row["count"]} for row in by_status],
        "monthly_revenue": monthly_delivered_revenue(),
    }


# ============================================================
# EXPORT
# ============================================================


def daily_rows(range_key: str | None) -> list[dict]:
    """
    One row per local calendar day in the window (oldest first):
    orders placed that day and revenue from those that are DELIVERED.
    """
    start = range_start(range_key)
    first_day = timezone.localtime(start).date()
    last_day = timezone.localdate()

    buckets: OrderedDict[date, dict] = OrderedDict()
    day = first_day
    while day <= last_day:
        buckets[day] = {"date": day, "orders": 0, "revenue": ZERO}
        day += timedelta(days=1)

    rows = Order.objects.filter(created_at__gte=start).values_list(
        "created_at", "status", "total_amount"
    )
    for created_at, status, total_amount in rows:
        bucket = buckets.get(timezone.localtime(created_at).date())
        if bucket is None:
            continue
        bucket["orders"] += 1
        if status == Order.Status.DELIVERED:
            bucket["revenue"] += Decimal(total_amount or ZERO)

    return list(buckets.values())
