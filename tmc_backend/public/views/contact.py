# public/views/contact.py

"""
PUBLIC CONTACT FORM

- POST /api/public/contact/

Messages are validated and logged for the support inbox; nothing is stored.
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from public.serializers import ContactMessageSerializer, ContactResponseSerializer
from users.views.auth import PublicWriteThrottle

logger = logging.getLogger(__name__)


class ContactView(APIView):
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(
        tags=["Public"],
        request=ContactMessageSerializer,
        responses={
            200: ContactResponseSerializer,
            400: OpenApiResponse(description="Validation error"),
            429: OpenApiResponse(description="Rate limited"),
        },
        description="Send a message to the store team.",
    )
    def post(self, request, *args, **kwargs):
        s = ContactMessageSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        logger.info(
            "Contact message received",
            extra={
                "contact_name": data["name"],
                "contact_email": data["email"],
                "contact_phone": data.get("phone", ""),
                "subject": data["subject"],
                "message_length": len(data["message"]),
            },
        )

        return Response(
            {
                "success": True,
                "message": "Thank you for contacting us! We will get back to you soon.",
            }
        )
