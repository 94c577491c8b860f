# products/serializers/__init__.py

from .category import CategorySerializer
from .product import (
    ProductSerializer,
    ProductSnapshotSerializer,
    ProductWriteSerializer,
)

__all__ = [
    "CategorySerializer",
    "ProductSerializer",
    "ProductSnapshotSerializer",
    "ProductWriteSerializer",
]
