# users/services/accounts.py

"""
ACCOUNT SERVICES

Purpose:
- Register consumer and business buyers (user + pending Business, atomic).
- Move Business applications through PENDING / APPROVED / REJECTED.

Rules:
- Business registrations always start PENDING.
- Status changes are logged with the acting admin for audit.
"""

from __future__ import annotations

import logging

from django.db import transaction

from users.models import Business, User

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================


class AccountError(Exception):
    pass


class BusinessNotFoundError(AccountError):
    pass


class InvalidBusinessStatusError(AccountError):
    pass


# ============================================================
# REGISTRATION
# ============================================================


@transaction.atomic
def register_user(
    *,
    first_name: str,
    last_name: str,
    email: str,
    password: str,
    phone: str,
    user_type: str,
    business_data: dict | None = None,
) -> User:
    is_business = user_type == "business"

    user = User.objects.create_user(
        email=email,
        password=password,
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        role=User.Role.BUSINESS if is_business else User.Role.CONSUMER,
    )

    logger.info("User registered", extra={"user_id": str(user.id), "role": user.role})

    if is_business and business_data:
        business = Business.objects.create(
            user=user,
            status=Business.Status.PENDING,
            **business_data,
        )
        logger.info(
            "Business application created",
            extra={"business_id": str(business.id), "user_id": str(user.id)},
        )

    return user


# ============================================================
# BUSINESS APPLICATIONS
# ============================================================


def _require_status(status: str) -> str:
    if status not in Business.Status.values:
        raise InvalidBusinessStatusError(f"Invalid status '{status}'")
    return status


@transaction.atomic
def set_business_status(*, business_id, status: str, reason: str = "", actor=None) -> Business:
    status = _require_status(status)

    business = (
        Business.objects.select_for_update()
        .select_related("user")
        .filter(id=business_id)
        .first()
    )
    if business is None:
        raise BusinessNotFoundError("Business not found")

    business.status = status
    business.rejection_reason = (reason or "").strip() if status == Business.Status.REJECTED else ""
    business.save(update_fields=["status", "rejection_reason", "updated_at"])

    logger.info(
        "Business status changed",
        extra={
            "business_id": str(business.id),
            "business_name": business.business_name,
            "status": status,
            "reason": business.rejection_reason,
            "actor_id": str(getattr(actor, "id", "") or ""),
        },
    )
    return business


def approve_business(*, business_id, actor=None) -> Business:
    return set_business_status(
        business_id=business_id,
        status=Business.Status.APPROVED,
        actor=actor,
    )


def reject_business(*, business_id, reason: str = "", actor=None) -> Business:
    return set_business_status(
        business_id=business_id,
        status=Business.Status.REJECTED,
        reason=reason,
        actor=actor,
    )


def set_user_business_status(*, user_id, status: str, reason: str = "", actor=None) -> User:
    """
    Admin shortcut keyed by user id (the users management screen).
    """
    business = Business.objects.filter(user_id=user_id).only("id").first()
    if business is None:
        raise BusinessNotFoundError("User has no business account")

    set_business_status(business_id=business.id, status=status, reason=reason, actor=actor)
    return User.objects.select_related("business").get(id=user_id)
