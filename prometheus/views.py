"""API views for the prometheus app."""

from django.conf import settings
from django.utils import timezone

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.views import parse_uuid, success_response
from prometheus.schemas import GenerateRequest
from prometheus.services import prometheus_service


class GenerateView(APIView):
    """Queue question generation for a booking."""

    def post(self, request):
        """Handle POST request to queue a generation session.

        Returns:
            202 with ``{id, bookingId, status, universities, createdAt}``
            400 if the body is invalid
        """
        generate_request = GenerateRequest.model_validate(request.data)
        session = prometheus_service.queue_generation(generate_request)
        return success_response(
            session.model_dump(by_alias=True),
            status_code=status.HTTP_202_ACCEPTED,
        )


class SessionDetailView(APIView):
    """Look up a generation session."""

    def get(self, _request, session_id):
        """Handle GET request for a session and its results."""
        session = prometheus_service.get_session(parse_uuid(session_id, "session id"))
        return success_response(session.model_dump(by_alias=True))


class PrometheusHealthView(APIView):
    """Health of the prometheus service."""

    def get(self, _request):
        """Handle GET request for service health."""
        return Response(
            {
                "status": "ok",
                "service": "prometheus",
                "environment": settings.ENVIRONMENT,
                "timestamp": timezone.now().isoformat(),
            },
            status=status.HTTP_200_OK,
        )
