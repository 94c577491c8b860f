# users/urls.py

from django.urls import path

from .views import (
    ApproveBusinessView,
    BusinessApplicationListView,
    LoginView,
    MeView,
    RegisterView,
    RejectBusinessView,
    UserBusinessStatusView,
)

app_name = "users"

urlpatterns = [
    # ---------------- PUBLIC AUTH ----------------
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    # ---------------- AUTHENTICATED ----------------
    path("me/", MeView.as_view(), name="me"),
    # ---------------- ADMIN: BUSINESS ACCOUNTS ----------------
    path(
        "business/applications/",
        BusinessApplicationListView.as_view(),
        name="business-applications",
    ),
    path(
        "business/applications/<uuid:business_id>/approve/",
        ApproveBusinessView.as_view(),
        name="business-approve",
    ),
    path(
        "business/applications/<uuid:business_id>/reject/",
        RejectBusinessView.as_view(),
        name="business-reject",
    ),
    path(
        "users/<uuid:user_id>/business-status/",
        UserBusinessStatusView.as_view(),
        name="user-business-status",
    ),
]
