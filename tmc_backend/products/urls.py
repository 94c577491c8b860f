# products/urls.py

"""
PRODUCTS URLS

Purpose:
- Register catalog routes under /api/products/
    /api/products/                 list + create
    /api/products/featured/        featured shelf
    /api/products/<uuid>/          detail / PUT / PATCH / DELETE
    /api/products/categories/      categories
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from products.views import CategoryViewSet, ProductViewSet

category_router = SimpleRouter()
category_router.register(r"categories", CategoryViewSet, basename="categories")

router = SimpleRouter()
router.register(r"", ProductViewSet, basename="products")

urlpatterns = [
    path("", include(category_router.urls)),
    path("", include(router.urls)),
]
