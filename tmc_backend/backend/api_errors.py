# backend/api_errors.py

"""
API ERROR NORMALIZATION

Every handled domain error leaves the API in one shape:

    {"error": {"code": "<MACHINE_CODE>", "message": "<human text>"}}

Serializer validation errors keep DRF's default field-error shape.
"""

from rest_framework.response import Response


def error_response(*, code: str, message: str, http_status: int):
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )
