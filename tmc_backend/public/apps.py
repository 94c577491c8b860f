# public/apps.py

"""
PUBLIC APP CONFIG

Storefront endpoints that need no account (contact form).
"""

from django.apps import AppConfig


class PublicConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "public"
    verbose_name = "Public Storefront"
