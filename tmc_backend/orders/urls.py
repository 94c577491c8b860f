# orders/urls.py

from django.urls import path

from orders.views import (
    AdminReportExportView,
    AdminReportView,
    AdminStatsView,
    OrderDetailView,
    OrderListCreateView,
    OrderPaymentView,
    OrderStatusView,
)

app_name = "orders"

urlpatterns = [
    path("", OrderListCreateView.as_view(), name="order-list"),
    path("admin/stats/", AdminStatsView.as_view(), name="admin-stats"),
    path("admin/reports/", AdminReportView.as_view(), name="admin-reports"),
    path("admin/reports/export/", AdminReportExportView.as_view(), name="admin-reports-export"),
    path("<str:order_id>/", OrderDetailView.as_view(), name="order-detail"),
    path("<str:order_id>/status/", OrderStatusView.as_view(), name="order-status"),
    path("<str:order_id>/payment/", OrderPaymentView.as_view(), name="order-payment"),
]
