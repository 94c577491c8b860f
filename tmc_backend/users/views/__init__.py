from .auth import LoginView, RegisterView
from .business import (
    ApproveBusinessView,
    BusinessApplicationListView,
    RejectBusinessView,
    UserBusinessStatusView,
)
from .me import MeView

__all__ = [
    "RegisterView",
    "LoginView",
    "MeView",
    "BusinessApplicationListView",
    "ApproveBusinessView",
    "RejectBusinessView",
    "UserBusinessStatusView",
]
