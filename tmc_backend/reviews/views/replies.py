# reviews/views/replies.py

"""
ADMIN REPLY VIEWS

- GET    /api/reviews/<id>/reply/   public: {"reply": {...} | null}
- POST   /api/reviews/<id>/reply/   admin: create (201) or edit (200)
- DELETE /api/reviews/<id>/reply/   admin: 404 when there is no reply
"""

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.api_errors import error_response
from reviews.models import AdminReply, Review
from reviews.serializers import AdminReplyInputSerializer, AdminReplySerializer
from reviews.services.reviews import upsert_admin_reply
from users.permissions import AdminOnlyMixin


class ReviewReplyView(AdminOnlyMixin, APIView):
    serializer_class = AdminReplyInputSerializer

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return super().get_permissions()

    @extend_schema(request=None, responses={200: dict}, description="The store's reply to a review")
    def get(self, request, review_id):
        reply = AdminReply.objects.filter(review_id=review_id).first()
        return Response({"reply": AdminReplySerializer(reply).data if reply else None})

    @extend_schema(
        request=AdminReplyInputSerializer,
        responses={200: dict, 201: dict, 404: OpenApiResponse(description="Review not found")},
        description="Add or edit the store's reply",
    )
    def post(self, request, review_id):
        s = AdminReplyInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        review = get_object_or_404(Review, id=review_id)
        reply, created = upsert_admin_reply(review=review, comment=s.validated_data["comment"])

        return Response(
            {
                "success": True,
                "message": "Reply added successfully" if created else "Reply updated successfully",
                "reply": AdminReplySerializer(reply).data,
            },
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    @extend_schema(request=None, responses={200: dict, 404: OpenApiResponse(description="No reply")})
    def delete(self, request, review_id):
        reply = AdminReply.objects.filter(review_id=review_id).first()
        if reply is None:
            return error_response(
                code="REPLY_NOT_FOUND",
                message="Reply not found",
                http_status=status.HTTP_404_NOT_FOUND,
            )

        reply.delete()
        return Response({"success": True, "message": "Reply deleted successfully"})
