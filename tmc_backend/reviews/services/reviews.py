# reviews/services/reviews.py

"""
======================================================
PATH: reviews/services/reviews.py
======================================================
REVIEW SERVICES

Rules:
- A buyer may review a product only after an order containing it was DELIVERED.
- One review per (buyer, product).
- Admin replies are one per review; posting again edits the existing reply.
"""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction

from orders.models import Order
from reviews.models import AdminReply, Review

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================


class ReviewError(Exception):
    pass


class ReviewNotAllowedError(ReviewError):
    pass


class DuplicateReviewError(ReviewError):
    pass


# ============================================================
# ELIGIBILITY
# ============================================================


def has_received_product(*, user, product_id) -> bool:
    return Order.objects.filter(
        user=user,
        status=Order.Status.DELIVERED,
        items__product_id=product_id,
    ).exists()


def review_eligibility(*, user, product_id) -> dict:
    if not user or not user.is_authenticated:
        return {"can_review": False, "has_reviewed": False}

    if Review.objects.filter(user=user, product_id=product_id).exists():
        return {"can_review": False, "has_reviewed": True}

    return {
        "can_review": has_received_product(user=user, product_id=product_id),
        "has_reviewed": False,
    }


# ============================================================
# REVIEWS
# ============================================================


def create_review(*, user, product_id, rating: int, comment: str = "") -> Review:
    if not has_received_product(user=user, product_id=product_id):
        raise ReviewNotAllowedError("You can only review products you have purchased")

    if Review.objects.filter(user=user, product_id=product_id).exists():
        raise DuplicateReviewError("You have already reviewed this product")

    try:
        with transaction.atomic():
            review = Review.objects.create(
                user=user,
                product_id=product_id,
                rating=int(rating),
                comment=comment or "",
            )
    except IntegrityError as exc:
        raise DuplicateReviewError("You have already reviewed this product") from exc

    logger.info(
        "Review created",
        extra={"review_id": str(review.id), "product_id": str(product_id), "rating": review.rating},
    )
    return review


# ============================================================
# ADMIN REPLIES
# ============================================================


@transaction.atomic
def upsert_admin_reply(*, review: Review, comment: str) -> tuple[AdminReply, bool]:
    reply, created = AdminReply.objects.select_for_update().get_or_create(
        review=review,
        defaults={"comment": comment},
    )
    if not created:
        reply.comment = comment
        reply.save(update_fields=["comment", "updated_at"])

    logger.info(
        "Admin reply saved",
        extra={"review_id": str(review.id), "created": created},
    )
    return reply, created
