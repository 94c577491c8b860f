# backend/urls.py
"""
PROJECT URLS

Everything the storefront calls lives under /api/:

- auth/       accounts, JWT, business applications
- products/   catalog + admin product management
- cart/       server-side cart
- orders/     checkout, lifecycle, payments, admin reports
- reviews/    reviews + store replies
- public/     contact form

Ops:
- /api/health/ pings the database (AllowAny)
- Django admin is mounted at settings.ADMIN_PATH
"""

from __future__ import annotations

from django.conf import settings
from django.contrib import admin
from django.db import DatabaseError, connections
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.utils import OpenApiTypes, extend_schema
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

API_MODULES = {
    "auth": "/api/auth/",
    "products": "/api/products/",
    "cart": "/api/cart/",
    "orders": "/api/orders/",
    "reviews": "/api/reviews/",
    "public": "/api/public/",
}


@extend_schema(responses={200: OpenApiTypes.OBJECT})
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response(
        {
            "message": "TMC Store API is running",
            "docs": {"swagger": "/api/docs/", "schema": "/api/schema/"},
            "modules": API_MODULES,
        }
    )


@extend_schema(responses={200: OpenApiTypes.OBJECT, 503: OpenApiTypes.OBJECT})
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    """
    200 when the default database answers SELECT 1, 503 otherwise.
    """
    try:
        with connections["default"].cursor() as cursor:
            cursor.execute("SELECT 1;")
            cursor.fetchone()
    except DatabaseError as exc:
        return Response({"status": "degraded", "db": "down", "error": str(exc)}, status=503)

    return Response({"status": "ok", "db": "ok"})


# Keep the trailing slash; production sets a non-obvious value.
ADMIN_PATH = settings.ADMIN_PATH if settings.ADMIN_PATH.endswith("/") else f"{settings.ADMIN_PATH}/"


api_urlpatterns = [
    path("", api_root, name="api-root"),
    path("health/", health_check, name="health-check"),
    # OpenAPI
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    # JWT
    path("auth/jwt/create/", TokenObtainPairView.as_view(), name="jwt-create"),
    path("auth/jwt/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),
    # Storefront modules
    path("auth/", include("users.urls")),
    path("products/", include("products.urls")),
    path("cart/", include("cart.urls")),
    path("orders/", include("orders.urls")),
    path("reviews/", include("reviews.urls")),
    path("public/", include("public.urls")),
]

urlpatterns = [
    path(ADMIN_PATH, admin.site.urls),
    path("", RedirectView.as_view(url="/api/docs/", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
]
