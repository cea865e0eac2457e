"""API views for core application."""

from uuid import UUID

import structlog
from pydantic import BaseModel, TypeAdapter
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import ValidationFailedError
from core.schemas.email import (
    CustomEmailRequest,
    NewsletterRequest,
    PackageEmailRequest,
    WelcomeEmailRequest,
)
from core.schemas.new_joiner import (
    NewJoinerDetail,
    NewJoinerFields,
    NewJoinerListParams,
)
from core.schemas.personal_statement import (
    FeedbackForm,
    PersonalStatementDetail,
    SubmitStatementForm,
    UpdatePersonalStatementRequest,
)
from core.schemas.resource import (
    CreateResourceRequest,
    ResourceDetail,
    UpdateResourceRequest,
)
from core.schemas.student import (
    SubmitAvailabilityRequest,
    UpdateProfileRequest,
    UpdateUniversityRequest,
)
from core.schemas.subscription import (
    CreateSubscriptionRequest,
    SubscriptionDetail,
    SubscriptionListParams,
    UpdateSubscriptionRequest,
)
from core.schemas.tutor import (
    BulkAvailabilityRequest,
    CreateTutorRequest,
    DateRangeParams,
    TutorDetail,
    TutorSlot,
    UpdateTutorRequest,
)
from core.services import EmailService, health_service
from core.services.email_analytics_service import email_analytics_service
from core.services.email_campaign_service import email_campaign_service
from core.services.new_joiner_service import new_joiner_service
from core.services.payment_service import payment_service
from core.services.personal_statement_service import personal_statement_service
from core.services.resource_service import resource_service
from core.services.student_service import student_service
from core.services.subscription_service import subscription_service
from core.services.tutor_service import tutor_service

logger = structlog.get_logger(__name__)

_uuid_adapter = TypeAdapter(UUID)


def success_response(
    data=None,
    message: str | None = None,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    """Wrap a payload in the ``{success, data?, message?}`` envelope."""
    body = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return Response(body, status=status_code)


def dump_all(schema: type[BaseModel], rows) -> list[dict]:
    """Serialize model instances through a response schema."""
    return [schema.model_validate(row).model_dump() for row in rows]


def validate_path_email(email: str) -> str:
    """Reject malformed addresses taken from the URL."""
    if not EmailService.is_valid_email(email):
        raise ValidationFailedError("Invalid email format")
    return email


def form_fields(request) -> dict:
    """Flatten form-encoded fields to single values; JSON bodies pass through."""
    data = request.data
    return data.dict() if hasattr(data, "dict") else dict(data)


def parse_uuid(value: str, label: str = "id") -> UUID:
    """Parse a UUID path or query value, answering 400 when malformed."""
    try:
        return _uuid_adapter.validate_python(value)
    except ValueError as e:
        raise ValidationFailedError(f"Invalid {label} format") from e


# Health


class LivenessCheckView(APIView):
    """Liveness probe endpoint.

    Returns 200 while the process is running. Dependencies are not checked.
    """

    def get(self, _request):
        """Handle GET request for liveness check."""
        liveness = health_service.get_liveness_status()
        return Response(liveness.model_dump(), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness probe endpoint.

    Returns 200 with a degraded status when Postgres or Redis is down, so the
    routes that do not need them keep receiving traffic.
    """

    def get(self, _request):
        """Handle GET request for readiness check."""
        readiness = health_service.get_readiness_status()
        return Response(readiness.model_dump(), status=status.HTTP_200_OK)


# Email campaigns


class NewsletterView(APIView):
    """Send the newsletter to opted-in, still-subscribed addresses."""

    def post(self, request):
        """Handle POST request to send a newsletter.

        Args:
            request: HTTP request with subject, content and optional
                target_tiers

        Returns:
            200 with ``{sent, failed, total}``
            400 if fields are missing or no subscriber matches
        """
        newsletter = NewsletterRequest.model_validate(request.data)
        logger.info("newsletter_requested", target_tiers=newsletter.target_tiers)

        summary = email_campaign_service.send_newsletter(newsletter)
        return success_response(
            summary.model_dump(),
            message=f"Newsletter sent to {summary.sent} subscribers",
        )


class CustomEmailView(APIView):
    """Send an email to explicit addresses or to subscribers of some tiers."""

    def post(self, request):
        """Handle POST request to send a custom email."""
        custom = CustomEmailRequest.model_validate(request.data)
        summary = email_campaign_service.send_custom(custom)
        return success_response(
            summary.model_dump(),
            message=f"Email sent to {summary.sent} recipients",
        )


class PackageEmailView(APIView):
    """Send an update to everyone who booked a package.

    Also mounted as ``emails/event-update``.
    """

    def post(self, request):
        """Handle POST request to email a package's bookers.

        Returns:
            200 with ``{sent, failed, total, package_type}``
            400 if fields are missing
            404 if nobody booked the package
        """
        package_request = PackageEmailRequest.model_validate(request.data)
        summary = email_campaign_service.send_to_package(package_request)
        return success_response(
            summary.model_dump(),
            message=(
                f"Email sent to {summary.sent} recipients who booked "
                f"{summary.package_type}"
            ),
        )


class WelcomeEmailView(APIView):
    """Resend the welcome email for an existing subscription."""

    def post(self, request):
        """Handle POST request to queue a welcome email."""
        welcome = WelcomeEmailRequest.model_validate(request.data)
        email_campaign_service.send_welcome(welcome)
        return success_response(message="Welcome email sent successfully")


class EmailConfigTestView(APIView):
    """Check the SMTP credentials by opening a connection."""

    def get(self, _request):
        """Handle GET request to test the email configuration."""
        is_valid = email_campaign_service.test_connection()
        return success_response(
            {"isValid": is_valid},
            message=(
                "Email configuration is valid"
                if is_valid
                else "Email configuration is invalid"
            ),
        )


class EmailStatsView(APIView):
    """Subscriber counts for the admin email dashboard."""

    def get(self, _request):
        """Handle GET request for subscription email statistics."""
        stats = email_campaign_service.get_subscription_stats()
        return success_response(stats.model_dump())


class EmailDeliveryStatsView(APIView):
    """Delivery outcomes recorded in ``email_logs``."""

    def get(self, request):
        """Handle GET request for delivery statistics.

        Args:
            request: HTTP request with optional ``start_date`` and
                ``end_date`` query parameters (YYYY-MM-DD)
        """
        date_range = DateRangeParams.model_validate(request.query_params.dict())
        stats = email_analytics_service.get_delivery_stats(
            start_date=date_range.start_date,
            end_date=date_range.end_date,
        )
        return success_response(stats.model_dump())


# Subscriptions


class SubscriptionListView(APIView):
    """Create a subscription, or list them for admins."""

    def post(self, request):
        """Handle POST request to subscribe an address.

        Returns:
            201 with the new subscription
            400 if the body is invalid
            409 if the address is already subscribed
        """
        create_request = CreateSubscriptionRequest.model_validate(request.data)
        subscription = subscription_service.create(create_request)
        return success_response(
            SubscriptionDetail.model_validate(subscription).model_dump(),
            message="Successfully subscribed",
            status_code=status.HTTP_201_CREATED,
        )

    def get(self, request):
        """Handle GET request for a page of subscriptions."""
        params = SubscriptionListParams.model_validate(request.query_params.dict())
        page, pagination = subscription_service.list_subscriptions(params)
        return success_response(
            {
                "subscriptions": dump_all(SubscriptionDetail, page),
                "pagination": pagination.model_dump(by_alias=True),
            }
        )


class SubscriptionDetailView(APIView):
    """Read, update or delete one subscription by email."""

    def get(self, _request, email):
        """Handle GET request for a subscription."""
        subscription = subscription_service.get(validate_path_email(email))
        return success_response(SubscriptionDetail.model_validate(subscription).model_dump())

    def put(self, request, email):
        """Handle PUT request to change tier or newsletter opt-in."""
        update_request = UpdateSubscriptionRequest.model_validate(request.data)
        subscription = subscription_service.update(validate_path_email(email), update_request)
        return success_response(
            SubscriptionDetail.model_validate(subscription).model_dump(),
            message="Subscription updated successfully",
        )

    def delete(self, _request, email):
        """Handle DELETE request for a subscription."""
        subscription_service.delete(validate_path_email(email))
        return success_response(message="Subscription deleted successfully")


class UnsubscribeView(APIView):
    """Soft-delete a subscription."""

    def post(self, _request, email):
        """Handle POST request to unsubscribe an address."""
        subscription = subscription_service.unsubscribe(validate_path_email(email))
        return success_response(
            SubscriptionDetail.model_validate(subscription).model_dump(),
            message="Successfully unsubscribed",
        )


class ResubscribeView(APIView):
    """Reactivate an unsubscribed address."""

    def post(self, _request, email):
        """Handle POST request to resubscribe an address."""
        subscription = subscription_service.resubscribe(validate_path_email(email))
        return success_response(
            SubscriptionDetail.model_validate(subscription).model_dump(),
            message="Successfully resubscribed",
        )


class SubscriptionAccessView(APIView):
    """Tier capability check used to gate premium content."""

    def get(self, request, email):
        """Handle GET request to check access to ``resource_type``."""
        result = subscription_service.check_access(
            validate_path_email(email),
            request.query_params.get("resource_type") or None,
        )
        message = None if result.subscription_tier else "No active subscription found"
        return success_response(result.to_response(), message=message)


# Resources


class ResourceDownloadView(APIView):
    """Signed download link for a tier-gated resource."""

    def get(self, request, email, resource_id):
        """Handle GET request for a resource download link.

        Returns:
            200 with ``{downloadUrl, expiresIn}``
            403 if the subscription is missing, unsubscribed or too low a tier
            404 if the resource is missing or inactive
        """
        link = resource_service.download_url(
            validate_path_email(email),
            parse_uuid(resource_id, "resource id"),
            source=request.query_params.get("source") or None,
        )
        return success_response(
            link.model_dump(by_alias=True),
            message="Download URL generated successfully",
        )


class SubscriberResourcesView(APIView):
    """Resources unlocked by a subscriber's tier."""

    def get(self, _request, email):
        """Handle GET request for the subscriber's resources."""
        resources = resource_service.for_subscriber(validate_path_email(email))
        return success_response(dump_all(ResourceDetail, resources))


class AdminResourceListView(APIView):
    """List or create resources."""

    def get(self, _request):
        """Handle GET request for every resource."""
        return success_response(dump_all(ResourceDetail, resource_service.list_all()))

    def post(self, request):
        """Handle POST request to create a resource."""
        create_request = CreateResourceRequest.model_validate(request.data)
        resource = resource_service.create(create_request)
        return success_response(
            ResourceDetail.model_validate(resource).model_dump(),
            message="Resource created successfully",
            status_code=status.HTTP_201_CREATED,
        )


class AdminResourceDetailView(APIView):
    """Update or delete one resource."""

    def put(self, request, resource_id):
        """Handle PUT request to change a resource."""
        resource_uuid = parse_uuid(resource_id, "resource id")
        update_request = UpdateResourceRequest.model_validate(request.data)
        resource = resource_service.update(resource_uuid, update_request)
        return success_response(
            ResourceDetail.model_validate(resource).model_dump(),
            message="Resource updated successfully",
        )

    def delete(self, _request, resource_id):
        """Handle DELETE request for a resource."""
        resource_service.delete(parse_uuid(resource_id, "resource id"))
        return success_response(message="Resource deleted successfully")


# New joiners


class NewJoinerListView(APIView):
    """Submit a tutor application, or list them for admins."""

    def post(self, request):
        """Handle POST request for a tutor application.

        Returns:
            201 with the stored application
            400 naming the first missing or malformed field
            409 if the email already applied
        """
        fields = NewJoinerFields.model_validate(form_fields(request))
        new_joiner = new_joiner_service.create(fields)
        return success_response(
            NewJoinerDetail.model_validate(new_joiner).model_dump(),
            message="Application submitted successfully",
            status_code=status.HTTP_201_CREATED,
        )

    def get(self, request):
        """Handle GET request for a page of applications."""
        params = NewJoinerListParams.model_validate(request.query_params.dict())
        page, pagination = new_joiner_service.list_applications(params)
        return success_response(
            {
                "new_joiners": dump_all(NewJoinerDetail, page),
                "pagination": pagination.model_dump(by_alias=True),
            }
        )


class NewJoinerBySubjectView(APIView):
    """Applications offering a subject."""

    def get(self, _request, subject):
        """Handle GET request filtering applications by subject."""
        return success_response(
            dump_all(NewJoinerDetail, new_joiner_service.by_subject(subject))
        )


class NewJoinerByAvailabilityView(APIView):
    """Applications available in a slot."""

    def get(self, _request, slot):
        """Handle GET request filtering applications by availability."""
        return success_response(
            dump_all(NewJoinerDetail, new_joiner_service.by_availability(slot))
        )


class NewJoinerByEmailView(APIView):
    """Look an application up by applicant email."""

    def get(self, _request, email):
        """Handle GET request for an application by email."""
        new_joiner = new_joiner_service.get_by_email(validate_path_email(email))
        return success_response(NewJoinerDetail.model_validate(new_joiner).model_dump())


class NewJoinerDetailView(APIView):
    """Read, update or delete one application."""

    def get(self, _request, new_joiner_id):
        """Handle GET request for an application."""
        new_joiner = new_joiner_service.get(parse_uuid(new_joiner_id))
        return success_response(NewJoinerDetail.model_validate(new_joiner).model_dump())

    def put(self, request, new_joiner_id):
        """Handle PUT request to edit an application."""
        fields = NewJoinerFields.model_validate(form_fields(request))
        new_joiner = new_joiner_service.update(parse_uuid(new_joiner_id), fields)
        return success_response(
            NewJoinerDetail.model_validate(new_joiner).model_dump(),
            message="Application updated successfully",
        )

    def delete(self, _request, new_joiner_id):
        """Handle DELETE request for an application."""
        new_joiner_service.delete(parse_uuid(new_joiner_id))
        return success_response(message="Application deleted successfully")


# Personal statements


class PersonalStatementSubmitView(APIView):
    """Upload a statement and start the review checkout."""

    def post(self, request):
        """Handle multipart POST of a personal statement.

        Args:
            request: Multipart request with ``personalStatement`` file and
                ``firstName``, ``lastName``, ``email``, ``statementType``

        Returns:
            200 with ``{checkout_url, session_id}``
            400 if the file or a field is missing or invalid
        """
        form = SubmitStatementForm.model_validate(form_fields(request))
        checkout = personal_statement_service.submit(
            form, request.FILES.get("personalStatement")
        )
        return success_response(checkout.model_dump())


class PersonalStatementListView(APIView):
    """Every personal statement, newest first."""

    def get(self, _request):
        """Handle GET request for all statements."""
        return success_response(
            dump_all(PersonalStatementDetail, personal_statement_service.list_all())
        )


class PersonalStatementByStatusView(APIView):
    """Statements in one review status."""

    def get(self, _request, statement_status):
        """Handle GET request filtering statements by status."""
        return success_response(
            dump_all(
                PersonalStatementDetail,
                personal_statement_service.list_by_status(statement_status),
            )
        )


class PersonalStatementByEmailView(APIView):
    """Statements submitted by one student."""

    def get(self, _request, email):
        """Handle GET request filtering statements by email."""
        return success_response(
            dump_all(
                PersonalStatementDetail,
                personal_statement_service.list_by_email(validate_path_email(email)),
            )
        )


class PersonalStatementDetailView(APIView):
    """Read or edit one statement."""

    def get(self, _request, statement_id):
        """Handle GET request for a statement."""
        statement = personal_statement_service.get(parse_uuid(statement_id))
        return success_response(
            PersonalStatementDetail.model_validate(statement).model_dump()
        )

    def put(self, request, statement_id):
        """Handle PUT request with reviewer edits."""
        update_request = UpdatePersonalStatementRequest.model_validate(request.data)
        statement = personal_statement_service.update(
            parse_uuid(statement_id), update_request
        )
        return success_response(
            PersonalStatementDetail.model_validate(statement).model_dump(),
            message="Personal statement updated successfully",
        )


class PersonalStatementDownloadView(APIView):
    """Signed link to the submitted document."""

    def get(self, _request, statement_id):
        """Handle GET request for a download link."""
        link = personal_statement_service.download_link(parse_uuid(statement_id))
        return success_response(link.model_dump())


class PersonalStatementFeedbackView(APIView):
    """Reviewer feedback upload."""

    def post(self, request, statement_id):
        """Handle multipart POST with the ``feedback`` file and reviewer email."""
        statement_uuid = parse_uuid(statement_id)
        form = FeedbackForm.model_validate(form_fields(request))
        statement = personal_statement_service.upload_feedback(
            statement_uuid, form, request.FILES.get("feedback")
        )
        return success_response(
            PersonalStatementDetail.model_validate(statement).model_dump(),
            message="Feedback uploaded successfully",
        )


class StripeWebhookView(APIView):
    """Receives Stripe events; records paid statement reviews.

    The raw body is needed for signature verification, so ``request.body``
    is read before DRF parses anything.
    """

    def post(self, request):
        """Handle a Stripe webhook delivery.

        Returns:
            200 with ``{received: true}``
            400 if the payload or signature is invalid
        """
        event = payment_service.construct_event(
            request.body, request.headers.get("Stripe-Signature")
        )
        event_type = event.get("type")
        logger.info("stripe_webhook_received", event_type=event_type, event_id=event.get("id"))

        if event_type == "checkout.session.completed":
            personal_statement_service.record_paid_submission(event["data"]["object"])

        return Response({"received": True}, status=status.HTTP_200_OK)


# Students


class StudentDashboardView(APIView):
    """Everything the student dashboard renders."""

    def get(self, _request, email):
        """Handle GET request for a student's dashboard."""
        dashboard = student_service.get_dashboard(validate_path_email(email))
        return success_response(dashboard.model_dump())


class StudentAvailabilityView(APIView):
    """A student's future availability."""

    def get(self, _request, student_id):
        """Handle GET request for future availability."""
        slots = student_service.get_availability(parse_uuid(student_id, "student id"))
        return success_response([slot.model_dump() for slot in slots])

    def post(self, request, student_id):
        """Handle POST request replacing future availability."""
        submit_request = SubmitAvailabilityRequest.model_validate(request.data)
        slots = student_service.submit_availability(
            parse_uuid(student_id, "student id"), submit_request
        )
        return success_response(
            [slot.model_dump() for slot in slots],
            message="Availability submitted successfully",
            status_code=status.HTTP_201_CREATED,
        )


class StudentProfileView(APIView):
    """Editable student profile fields."""

    def put(self, request, user_id):
        """Handle PUT request to update a profile."""
        update_request = UpdateProfileRequest.model_validate(request.data)
        user = student_service.update_profile(parse_uuid(user_id, "user id"), update_request)
        return success_response(user.model_dump(), message="Profile updated successfully")


class BookingUniversityView(APIView):
    """University preference on a booking."""

    def put(self, request, booking_id):
        """Handle PUT request to set the booking's universities."""
        update_request = UpdateUniversityRequest.model_validate(request.data)
        booking = student_service.update_booking_university(
            parse_uuid(booking_id, "booking id"), update_request
        )
        return success_response(booking.model_dump(), message="University updated successfully")


# Tutors


class TutorListView(APIView):
    """Register a tutor, or list every tutor."""

    def post(self, request):
        """Handle POST request to create a tutor.

        Returns:
            201 with the new tutor, or 200 with the existing one when the
            email is already registered
        """
        create_request = CreateTutorRequest.model_validate(request.data)
        tutor, created = tutor_service.create(create_request)
        return success_response(
            TutorDetail.model_validate(tutor).model_dump(),
            message="Tutor created successfully" if created else "Tutor already exists",
            status_code=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    def get(self, _request):
        """Handle GET request for all tutors."""
        return success_response(dump_all(TutorDetail, tutor_service.list_tutors()))


class TutorLookupView(APIView):
    """Look a tutor up by ``id`` or ``email`` query parameter."""

    def get(self, request):
        """Handle GET request for a single tutor."""
        tutor_id = request.query_params.get("id")
        tutor = tutor_service.get(
            tutor_id=parse_uuid(tutor_id, "tutor id") if tutor_id else None,
            email=request.query_params.get("email"),
        )
        return success_response(TutorDetail.model_validate(tutor).model_dump())


class TutorDetailView(APIView):
    """Edit a tutor."""

    def put(self, request, tutor_id):
        """Handle PUT request to update a tutor."""
        update_request = UpdateTutorRequest.model_validate(request.data)
        tutor = tutor_service.update(parse_uuid(tutor_id, "tutor id"), update_request)
        return success_response(
            TutorDetail.model_validate(tutor).model_dump(),
            message="Tutor updated successfully",
        )


class TutorsWithAvailabilityView(APIView):
    """Calendar view: every non-manager tutor with their slots."""

    def get(self, request):
        """Handle GET request for the tutor calendar."""
        date_range = DateRangeParams.model_validate(request.query_params.dict())
        tutors = tutor_service.list_with_availability(date_range)
        return success_response([tutor.model_dump() for tutor in tutors])


class TutorAvailabilityView(APIView):
    """A tutor's calendar slots."""

    def get(self, request, tutor_id):
        """Handle GET request for slots in an optional date range."""
        date_range = DateRangeParams.model_validate(request.query_params.dict())
        slots = tutor_service.get_availability(parse_uuid(tutor_id, "tutor id"), date_range)
        return success_response([slot.model_dump() for slot in slots])

    def post(self, request, tutor_id):
        """Handle POST request adding one slot.

        Returns:
            201 with the stored slot
            400 if the slot overlaps an existing one
            404 if the tutor does not exist
        """
        slot = TutorSlot.model_validate(request.data)
        availability = tutor_service.add_availability(parse_uuid(tutor_id, "tutor id"), slot)
        return success_response(
            availability.model_dump(),
            message="Availability added successfully",
            status_code=status.HTTP_201_CREATED,
        )


class TutorBulkAvailabilityView(APIView):
    """Add several tutor slots at once."""

    def post(self, request, tutor_id):
        """Handle POST request adding many slots."""
        bulk_request = BulkAvailabilityRequest.model_validate(request.data)
        slots = tutor_service.add_bulk_availability(
            parse_uuid(tutor_id, "tutor id"), bulk_request
        )
        return success_response(
            [slot.model_dump() for slot in slots],
            message=f"{len(slots)} availability slots added",
            status_code=status.HTTP_201_CREATED,
        )


class TutorAvailabilityDeleteView(APIView):
    """Remove one calendar slot."""

    def delete(self, _request, availability_id):
        """Handle DELETE request for a slot."""
        tutor_service.delete_availability(parse_uuid(availability_id, "availability id"))
        return success_response(message="Availability deleted successfully")


class TutorUpcomingSessionsView(APIView):
    """Upcoming interviews on the tutor dashboard."""

    def get(self, _request, tutor_id):
        """Handle GET request for upcoming sessions."""
        sessions = tutor_service.upcoming_sessions(parse_uuid(tutor_id, "tutor id"))
        return success_response([session.model_dump(by_alias=True) for session in sessions])


class TutorSessionStatsView(APIView):
    """Interview counts on the tutor dashboard."""

    def get(self, _request, tutor_id):
        """Handle GET request for session statistics."""
        stats = tutor_service.session_stats(parse_uuid(tutor_id, "tutor id"))
        return success_response(stats.model_dump(by_alias=True))
