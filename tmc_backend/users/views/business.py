# users/views/business.py

"""
BUSINESS APPLICATION VIEWS (ADMIN)

- GET   /api/auth/business/applications/?status=PENDING
- PATCH /api/auth/business/applications/          {business_id, status, reason?}
- POST  /api/auth/business/applications/<id>/approve/
- POST  /api/auth/business/applications/<id>/reject/  {reason?}
- PATCH /api/auth/users/<id>/business-status/     {status}
"""

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import serializers, status
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.api_errors import error_response
from users.models import Business
from users.permissions import AdminOnlyMixin
from users.serializers import (
    BusinessSerializer,
    BusinessStatusInputSerializer,
    RejectBusinessInputSerializer,
    UserSerializer,
)
from users.services.accounts import (
    BusinessNotFoundError,
    approve_business,
    reject_business,
    set_business_status,
    set_user_business_status,
)


class BusinessApplicationUpdateInputSerializer(BusinessStatusInputSerializer):
    business_id = serializers.UUIDField()


class BusinessApplicationListView(AdminOnlyMixin, APIView):
    serializer_class = BusinessSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="status",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="PENDING (default), APPROVED or REJECTED",
            ),
        ],
        responses={200: BusinessSerializer(many=True)},
        description="List business applications by status",
    )
    def get(self, request):
        wanted = (request.query_params.get("status") or Business.Status.PENDING).strip().upper()
        if wanted not in Business.Status.values:
            return error_response(
                code="INVALID_STATUS",
                message="Invalid status",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        qs = Business.objects.select_related("user").filter(status=wanted).order_by("-created_at")
        return Response(BusinessSerializer(qs, many=True).data)

    @extend_schema(
        request=BusinessApplicationUpdateInputSerializer,
        responses={200: BusinessSerializer, 404: OpenApiResponse(description="Business not found")},
        description="Set a business application's status",
    )
    def patch(self, request):
        s = BusinessApplicationUpdateInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            business = set_business_status(
                business_id=s.validated_data["business_id"],
                status=s.validated_data["status"],
                reason=s.validated_data.get("reason", ""),
                actor=request.user,
            )
        except BusinessNotFoundError as exc:
            return error_response(
                code="BUSINESS_NOT_FOUND",
                message=str(exc),
                http_status=status.HTTP_404_NOT_FOUND,
            )

        return Response(
            {
                "message": f"Business status updated to {business.status}",
                "business": BusinessSerializer(business).data,
            }
        )


class ApproveBusinessView(AdminOnlyMixin, APIView):
    serializer_class = None

    @extend_schema(request=None, responses={200: dict}, description="Approve a business application")
    def post(self, request, business_id):
        try:
            approve_business(business_id=business_id, actor=request.user)
        except BusinessNotFoundError as exc:
            return error_response(
                code="BUSINESS_NOT_FOUND",
                message=str(exc),
                http_status=status.HTTP_404_NOT_FOUND,
            )
        return Response({"message": "Business application approved"})


class RejectBusinessView(AdminOnlyMixin, APIView):
    serializer_class = RejectBusinessInputSerializer

    @extend_schema(
        request=RejectBusinessInputSerializer,
        responses={200: dict},
        description="Reject a business application (reason is stored)",
    )
    def post(self, request, business_id):
        s = RejectBusinessInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            reject_business(
                business_id=business_id,
                reason=s.validated_data.get("reason", ""),
                actor=request.user,
            )
        except BusinessNotFoundError as exc:
            return error_response(
                code="BUSINESS_NOT_FOUND",
                message=str(exc),
                http_status=status.HTTP_404_NOT_FOUND,
            )
        return Response({"message": "Business application rejected"})


class UserBusinessStatusView(AdminOnlyMixin, APIView):
    serializer_class = BusinessStatusInputSerializer

    @extend_schema(
        request=BusinessStatusInputSerializer,
        responses={200: dict},
        description="Set the business status of a user's account",
    )
    def patch(self, request, user_id):
        s = BusinessStatusInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            user = set_user_business_status(
                user_id=user_id,
                status=s.validated_data["status"],
                reason=s.validated_data.get("reason", ""),
                actor=request.user,
            )
        except BusinessNotFoundError as exc:
            return error_response(
                code="BUSINESS_NOT_FOUND",
                message=str(exc),
                http_status=status.HTTP_404_NOT_FOUND,
            )

        return Response(
            {
                "message": f"Business status updated to {user.business_status}",
                "user": UserSerializer(user).data,
            }
        )
