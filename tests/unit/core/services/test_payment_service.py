"""Tests for PaymentService."""

import json
from unittest.mock import MagicMock, patch

import stripe
from django.test import SimpleTestCase, override_settings

from core.exceptions import ExternalServiceError, ValidationFailedError
from core.services.payment_service import PaymentService


class TestCreateCheckoutPayment(SimpleTestCase):
    """Checkout session creation."""

    def setUp(self):
        """Set up test fixtures."""
        self.service = PaymentService()

    @patch("core.services.payment_service.stripe.checkout.Session.create")
    def test_creates_single_payment_session(self, mock_create):
        """Amounts are sent in minor units with a lowercase currency."""
        mock_create.return_value = MagicMock(
            id="cs_test_1", url="https://checkout.stripe.com/c/pay/cs_test_1"
        )

        checkout = self.service.create_checkout_payment(
            amount=20.0,
            currency="GBP",
            description="Personal Statement Review - medicine",
            customer_email="ada@example.com",
            metadata={"type": "personal_statement_review"},
        )

        self.assertEqual(checkout.session_id, "cs_test_1")
        kwargs = mock_create.call_args.kwargs
        price = kwargs["line_items"][0]["price_data"]
        self.assertEqual(price["unit_amount"], 2000)
        self.assertEqual(price["currency"], "gbp")
        self.assertEqual(kwargs["mode"], "payment")
        self.assertIn("{CHECKOUT_SESSION_ID}", kwargs["success_url"])

    @patch("core.services.payment_service.stripe.checkout.Session.create")
    def test_stripe_errors_become_external_service_errors(self, mock_create):
        """Stripe failures are wrapped for the error handler."""
        mock_create.side_effect = stripe.StripeError("card_declined")

        with self.assertRaises(ExternalServiceError) as ctx:
            self.service.create_checkout_payment(20.0, "GBP", "Review", "a@example.com")

        self.assertEqual(ctx.exception.service_name, "stripe")


class TestConstructEvent(SimpleTestCase):
    """Webhook verification."""

    payload = json.dumps(
        {"type": "checkout.session.completed", "data": {"object": {"id": "cs_1"}}}
    ).encode()

    @patch("core.services.payment_service.stripe.Webhook.construct_event")
    def test_valid_signature_returns_plain_event(self, mock_construct):
        """The verified payload is returned as a dict."""
        event = PaymentService.construct_event(self.payload, "t=1,v1=abc")

        self.assertEqual(event["data"]["object"]["id"], "cs_1")
        mock_construct.assert_called_once_with(
            self.payload, "t=1,v1=abc", "whsec_test_medprep"
        )

    @patch("core.services.payment_service.stripe.Webhook.construct_event")
    def test_bad_signature(self, mock_construct):
        """Signature mismatches are client errors."""
        mock_construct.side_effect = stripe.SignatureVerificationError(
            "No signatures found", "t=1,v1=bad"
        )

        with self.assertRaisesRegex(ValidationFailedError, "Invalid webhook signature"):
            PaymentService.construct_event(self.payload, "t=1,v1=bad")

    @patch("core.services.payment_service.stripe.Webhook.construct_event")
    def test_bad_payload(self, mock_construct):
        """Unparseable payloads are client errors."""
        mock_construct.side_effect = ValueError("Expecting value")

        with self.assertRaisesRegex(ValidationFailedError, "Invalid payload"):
            PaymentService.construct_event(b"not json", "t=1,v1=abc")

    @override_settings(STRIPE_WEBHOOK_SECRET="")
    def test_missing_secret(self):
        """Without a secret nothing can be verified."""
        with self.assertRaises(ExternalServiceError):
            PaymentService.construct_event(self.payload, "t=1,v1=abc")
