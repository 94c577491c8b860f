from .cart_item import (
    AddCartItemInputSerializer,
    CartItemSerializer,
    UpdateCartItemInputSerializer,
)

__all__ = [
    "CartItemSerializer",
    "AddCartItemInputSerializer",
    "UpdateCartItemInputSerializer",
]
