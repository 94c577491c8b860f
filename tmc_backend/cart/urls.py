"""
PATH: cart/urls.py

CART URLS

- /api/cart/            list + add
- /api/cart/count/      total units (anonymous -> 0)
- /api/cart/<id>/       set quantity + remove
"""

from django.urls import path

from cart.views.api import CartCountView, CartItemView, CartView

app_name = "cart"

urlpatterns = [
    path("", CartView.as_view(), name="cart"),
    path("count/", CartCountView.as_view(), name="cart-count"),
    path("<uuid:item_id>/", CartItemView.as_view(), name="cart-item"),
]
