# public/urls.py
"""
PUBLIC API URLS

Base path (mounted in backend/urls.py):
    /api/public/

- POST /api/public/contact/
"""

from __future__ import annotations

from django.urls import path

from public.views.contact import ContactView

app_name = "public"

urlpatterns = [
    path("contact/", ContactView.as_view(), name="public-contact"),
]
