# reviews/views/reviews.py

"""
REVIEW VIEWS

- POST   /api/reviews/                 buyer creates a review (needs a delivered order)
- PUT    /api/reviews/<id>/            owner edits
- DELETE /api/reviews/<id>/            owner or admin removes
- GET    /api/reviews/can-review/?productId=<uuid>
"""

import logging
import uuid

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import serializers, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.api_errors import error_response
from reviews.models import Review
from reviews.serializers import (
    ReviewCreateSerializer,
    ReviewSerializer,
    ReviewUpdateSerializer,
)
from reviews.services.reviews import (
    DuplicateReviewError,
    ReviewNotAllowedError,
    create_review,
    review_eligibility,
)

logger = logging.getLogger(__name__)


class ReviewEligibilitySerializer(serializers.Serializer):
    can_review = serializers.BooleanField()
    has_reviewed = serializers.BooleanField()


class ReviewCreateView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = ReviewCreateSerializer

    @extend_schema(
        request=ReviewCreateSerializer,
        responses={
            201: ReviewSerializer,
            400: OpenApiResponse(description="Not purchased, already reviewed, or invalid rating"),
        },
        description="Review a product from a delivered order",
    )
    def post(self, request):
        s = ReviewCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            review = create_review(
                user=request.user,
                product_id=s.validated_data["product_id"],
                rating=s.validated_data["rating"],
                comment=s.validated_data.get("comment", ""),
            )
        except ReviewNotAllowedError as exc:
            return error_response(
                code="REVIEW_NOT_ALLOWED",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        except DuplicateReviewError as exc:
            return error_response(
                code="DUPLICATE_REVIEW",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)


class ReviewDetailView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = ReviewUpdateSerializer

    @extend_schema(
        request=ReviewUpdateSerializer,
        responses={200: ReviewSerializer, 403: OpenApiResponse(description="Not your review")},
        description="Edit your own review",
    )
    def put(self, request, review_id):
        review = get_object_or_404(Review.objects.select_related("user"), id=review_id)

        if review.user_id != request.user.id:
            return error_response(
                code="FORBIDDEN",
                message="You can only edit your own reviews",
                http_status=status.HTTP_403_FORBIDDEN,
            )

        s = ReviewUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        review.rating = s.validated_data["rating"]
        review.comment = s.validated_data["comment"]
        review.save(update_fields=["rating", "comment", "updated_at"])

        return Response(ReviewSerializer(review).data)

    @extend_schema(
        request=None,
        responses={200: dict, 403: OpenApiResponse(description="Not your review")},
        description="Delete your own review (admins may delete any)",
    )
    def delete(self, request, review_id):
        review = get_object_or_404(Review, id=review_id)

        if review.user_id != request.user.id and not request.user.is_admin:
            return error_response(
                code="FORBIDDEN",
                message="You can only delete your own reviews",
                http_status=status.HTTP_403_FORBIDDEN,
            )

        review.delete()
        logger.info(
            "Review deleted",
            extra={"review_id": str(review_id), "actor_id": str(request.user.id)},
        )
        return Response({"message": "Review deleted successfully"})


class CanReviewView(APIView):
    permission_classes = [AllowAny]
    serializer_class = ReviewEligibilitySerializer

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="productId",
                type=str,
                location=OpenApiParameter.QUERY,
                required=True,
                description="Product UUID",
            ),
        ],
        responses={200: ReviewEligibilitySerializer},
        description="Whether the caller may review a product",
    )
    def get(self, request):
        if not request.user.is_authenticated:
            return Response({"can_review": False, "has_reviewed": False})

        raw = (request.query_params.get("productId") or "").strip()
        try:
            product_id = uuid.UUID(raw)
        except ValueError:
            return error_response(
                code="PRODUCT_ID_REQUIRED",
                message="A valid productId is required",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(review_eligibility(user=request.user, product_id=product_id))
