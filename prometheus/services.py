"""Queueing of mock interview question generation."""

from uuid import UUID

import structlog

from core.exceptions import ResourceNotFoundError
from prometheus.models import MockInterviewSession, SessionStatus
from prometheus.schemas import (
    GenerateRequest,
    GenerationSession,
    GenerationSessionDetail,
)

logger = structlog.get_logger(__name__)


class PrometheusService:
    """Records generation requests for the external question generator."""

    def queue_generation(self, request: GenerateRequest) -> GenerationSession:
        """Insert a pending session for the booking's universities."""
        logger.info(
            "prometheus_generation_queued",
            booking_id=request.booking_id,
            universities=request.universities,
        )
        session = MockInterviewSession.objects.create(
            booking_id=request.booking_id,
            student_email=request.student_email,
            universities=request.universities,
            metadata=request.metadata.model_dump(by_alias=True, exclude_none=True),
            status=SessionStatus.PENDING.value,
        )
        return GenerationSession.model_validate(session)

    def get_session(self, session_id: UUID) -> GenerationSessionDetail:
        """Return a session with its results.

        Raises:
            ResourceNotFoundError: If no session has this id
        """
        session = MockInterviewSession.objects.filter(id=session_id).first()
        if session is None:
            raise ResourceNotFoundError("Session not found")
        return GenerationSessionDetail.model_validate(session)


prometheus_service = PrometheusService()
