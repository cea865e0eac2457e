"""Component tests for personal statement review endpoints."""

import json
from unittest.mock import Mock, patch
from uuid import uuid4

from django.core.files.uploadedfile import SimpleUploadedFile

from core.exceptions import ValidationFailedError
from core.models import PersonalStatement
from core.schemas.personal_statement import CheckoutSession
from core.services.personal_statement_service import personal_statement_service
from tests.base import BaseComponentTest
from tests.factories import make_personal_statement


class PersonalStatementEndpointTest(BaseComponentTest):
    """Shared setup: storage and Stripe are replaced by mocks."""

    url = "/api/v1/personal-statements"

    def setUp(self):
        """Set up test fixtures."""
        super().setUp()
        self.storage = Mock()
        self.storage.upload.side_effect = lambda bucket, path, data, content_type: path
        self.storage.create_signed_url.return_value = "https://signed.example/file"
        self.payments = Mock()
        self.payments.create_checkout_payment.return_value = CheckoutSession(
            checkout_url="https://checkout.stripe.com/c/pay/cs_test_1",
            session_id="cs_test_1",
        )
        for name, double in (("storage", self.storage), ("payments", self.payments)):
            patcher = patch.object(personal_statement_service, name, double)
            patcher.start()
            self.addCleanup(patcher.stop)


class TestSubmitEndpoint(PersonalStatementEndpointTest):
    """POST /api/v1/personal-statements/submit."""

    def form(self, **overrides):
        """Multipart form with a PDF attached."""
        data = {
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "ada@example.com",
            "statementType": "medicine",
            "personalStatement": SimpleUploadedFile(
                "ps.pdf", b"%PDF-1.4", content_type="application/pdf"
            ),
        }
        data.update(overrides)
        return data

    def test_submit_returns_checkout_session(self):
        """The response carries the Stripe Checkout URL."""
        response = self.client.post(f"{self.url}/submit", data=self.form())

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json()["data"],
            {
                "checkout_url": "https://checkout.stripe.com/c/pay/cs_test_1",
                "session_id": "cs_test_1",
            },
        )
        self.assertEqual(PersonalStatement.objects.count(), 0)

    def test_submit_without_file(self):
        """The document is required."""
        form = self.form()
        del form["personalStatement"]

        response = self.client.post(f"{self.url}/submit", data=form)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Personal statement file is required")

    def test_submit_rejects_images(self):
        """Only document types are accepted."""
        image = SimpleUploadedFile("ps.png", b"\x89PNG", content_type="image/png")

        response = self.client.post(
            f"{self.url}/submit", data=self.form(personalStatement=image)
        )

        self.assertEqual(response.status_code, 400)
        self.storage.upload.assert_not_called()

    def test_submit_with_unknown_statement_type(self):
        """Statement type must be medicine or dentistry."""
        response = self.client.post(
            f"{self.url}/submit", data=self.form(statementType="law")
        )

        self.assertEqual(response.status_code, 400)


class TestStripeWebhook(PersonalStatementEndpointTest):
    """POST /api/v1/payments/stripe/webhook."""

    url = "/api/v1/payments/stripe/webhook"

    def event(self, event_type="checkout.session.completed"):
        """Verified event payload."""
        return {
            "id": "evt_1",
            "type": event_type,
            "data": {
                "object": {
                    "id": "cs_test_1",
                    "customer_email": "ada@example.com",
                    "metadata": {
                        "type": "personal_statement_review",
                        "first_name": "Ada",
                        "last_name": "Lovelace",
                        "statement_type": "medicine",
                        "personal_statement_file_path": "statements/ada_1.pdf",
                    },
                }
            },
        }

    @patch("core.views.payment_service.construct_event")
    def test_completed_checkout_records_statement_once(self, mock_construct):
        """Replayed deliveries do not create duplicates."""
        mock_construct.return_value = self.event()

        for _ in range(2):
            response = self.client.post(
                self.url,
                data=b"{}",
                content_type="application/json",
                HTTP_STRIPE_SIGNATURE="t=1,v1=abc",
            )
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.json(), {"received": True})

        self.assertEqual(PersonalStatement.objects.count(), 1)
        self.assertEqual(mock_construct.call_args.args, (b"{}", "t=1,v1=abc"))

    @patch("core.views.payment_service.construct_event")
    def test_other_events_are_acknowledged(self, mock_construct):
        """Unhandled event types are received but ignored."""
        mock_construct.return_value = self.event("payment_intent.created")

        response = self.client.post(self.url, data=b"{}", content_type="application/json")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(PersonalStatement.objects.count(), 0)

    @patch("core.views.payment_service.construct_event")
    def test_bad_signature_is_rejected(self, mock_construct):
        """Verification failures answer 400."""
        mock_construct.side_effect = ValidationFailedError("Invalid webhook signature")

        response = self.client.post(self.url, data=b"{}", content_type="application/json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid webhook signature")


class TestReviewEndpoints(PersonalStatementEndpointTest):
    """Listing, review edits, downloads and feedback."""

    def test_listings(self):
        """All, by status and by email."""
        statement = make_personal_statement(email="ada@example.com", status="in_review")
        make_personal_statement(status="pending")

        self.assertEqual(len(self.client.get(self.url).json()["data"]), 2)
        body = self.client.get(f"{self.url}/status/in_review").json()
        self.assertEqual([s["id"] for s in body["data"]], [str(statement.id)])
        body = self.client.get(f"{self.url}/email/ada@example.com").json()
        self.assertEqual([s["id"] for s in body["data"]], [str(statement.id)])

        self.assertEqual(self.client.get(f"{self.url}/status/archived").status_code, 400)

    def test_detail_and_update(self):
        """Reviewers can annotate a statement."""
        statement = make_personal_statement()
        detail_url = f"{self.url}/{statement.id}"

        self.assertEqual(self.client.get(detail_url).json()["data"]["status"], "pending")

        body = self.client.put(
            detail_url,
            data=json.dumps({"status": "in_review", "notes": "Strong opening"}),
            content_type="application/json",
        ).json()
        self.assertEqual(body["data"]["status"], "in_review")
        self.assertEqual(body["data"]["notes"], "Strong opening")

        self.assertEqual(self.client.get(f"{self.url}/{uuid4()}").status_code, 404)

    def test_download_link(self):
        """The download endpoint mints a signed URL."""
        statement = make_personal_statement()

        body = self.client.get(f"{self.url}/{statement.id}/download").json()

        self.assertEqual(
            body["data"],
            {"download_url": "https://signed.example/file", "expires_in": 3600},
        )

    def test_feedback_upload(self):
        """Feedback completes the review and emails the student."""
        statement = make_personal_statement()
        feedback = SimpleUploadedFile(
            "notes.pdf", b"%PDF-1.4", content_type="application/pdf"
        )

        response = self.client.post(
            f"{self.url}/{statement.id}/feedback",
            data={"reviewerEmail": "tutor@example.com", "feedback": feedback},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["status"], "complete")
        self.assertEqual(self.queued_categories(), ["PERSONAL_STATEMENT_FEEDBACK"])
