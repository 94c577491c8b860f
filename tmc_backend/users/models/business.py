"""
PATH: users/models/business.py

BUSINESS APPLICATION (WHOLESALE BUYERS)

Rules:
- One Business per BUSINESS user (created at registration).
- Starts PENDING; an admin approves or rejects it.
- Only APPROVED businesses unlock business-tier products.
"""

from __future__ import annotations

import uuid

from django.conf import settings
from django.db import models


class Business(models.Model):
    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        APPROVED = "APPROVED", "Approved"
        REJECTED = "REJECTED", "Rejected"

    class BusinessType(models.TextChoices):
        RESTAURANT = "RESTAURANT", "Restaurant"
        CATERING = "CATERING", "Catering"
        RETAIL = "RETAIL", "Retail"
        DISTRIBUTOR = "DISTRIBUTOR", "Distributor"
        OTHER = "OTHER", "Other"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="business",
    )

    business_name = models.CharField(max_length=255)
    business_type = models.CharField(max_length=32, choices=BusinessType.choices)

    address = models.CharField(max_length=255)
    city = models.CharField(max_length=120)
    state = models.CharField(max_length=120)
    zip_code = models.CharField(max_length=20)
    contact_person = models.CharField(max_length=255)

    website = models.CharField(max_length=255, blank=True, default="")
    description = models.TextField(blank=True, default="")

    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    rejection_reason = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "businesses"

    def __str__(self):
        return f"{self.business_name} ({self.status})"
