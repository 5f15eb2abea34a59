"""Base views for the Lantern API."""

from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView


class LanternBaseAPIView(APIView):
    """
    Base API view for all Lantern endpoints.

    Provides:
    - Staff access required by default (403 otherwise)
    - Common serializer context
    - The shared error response shape
    """
    permission_classes = [IsAdminUser]

    def get_serializer_context(self):
        """Return context dict for serializers."""
        return {"request": self.request}

    def error_response(self, code: str, message: str, status: int, **extra) -> Response:
        """Build an {"error": {...}} response."""
        return Response(
            {"error": {"code": code, "message": message, **extra}},
            status=status,
        )

    def validation_error(self, errors) -> Response:
        """400 response carrying serializer errors as details."""
        return self.error_response(
            "INVALID_REQUEST",
            "Request data is invalid.",
            400,
            details=errors,
        )
