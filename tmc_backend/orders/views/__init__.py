from .orders import (
    OrderDetailView,
    OrderListCreateView,
    OrderPaymentView,
    OrderStatusView,
)
from .reports import AdminReportExportView, AdminReportView, AdminStatsView

__all__ = [
    "OrderListCreateView",
    "OrderDetailView",
    "OrderStatusView",
    "OrderPaymentView",
    "AdminStatsView",
    "AdminReportView",
    "AdminReportExportView",
]
