"""Stripe Checkout sessions and webhook verification."""

import json
from typing import Any

from django.conf import settings

import stripe
import structlog

from core.exceptions import ExternalServiceError, ValidationFailedError
from core.schemas.personal_statement import CheckoutSession

logger = structlog.get_logger(__name__)


class PaymentService:
    """Creates one-off Stripe Checkout payments and verifies webhooks."""

    service_name = "stripe"

    def create_checkout_payment(
        self,
        amount: float,
        currency: str,
        description: str,
        customer_email: str,
        metadata: dict[str, str] | None = None,
    ) -> CheckoutSession:
        """Create a hosted Checkout session for a single payment.

        Args:
            amount: Price in major units (e.g. 20.00)
            currency: ISO currency code, any case
            description: Product name shown on the Checkout page
            customer_email: Pre-filled payer email
            metadata: Stored on the session and echoed in webhooks

        Returns:
            Checkout URL and session id

        Raises:
            ExternalServiceError: If Stripe rejects the request
        """
        frontend_url = settings.FRONTEND_URL
        try:
            session = stripe.checkout.Session.create(
                api_key=settings.STRIPE_SECRET_KEY,
                line_items=[
                    {
                        "price_data": {
                            "currency": currency.lower(),
                            "product_data": {"name": description},
                            "unit_amount": round(amount * 100),
                        },
                        "quantity": 1,
                    }
                ],
                mode="payment",
                success_url=f"{frontend_url}/payment/success?session_id={{CHECKOUT_SESSION_ID}}",
                cancel_url=f"{frontend_url}/payment/canceled",
                customer_email=customer_email,
                metadata=metadata or {},
            )
        except stripe.StripeError as e:
            logger.error(
                "stripe_checkout_failed",
                customer_email=customer_email,
                error=str(e),
            )
            raise ExternalServiceError(
                e.user_message or "Payment processing failed",
                service_name=self.service_name,
            ) from e

        logger.info(
            "stripe_checkout_created",
            session_id=session.id,
            customer_email=customer_email,
            amount=amount,
            currency=currency,
        )
        return CheckoutSession(checkout_url=session.url, session_id=session.id)

    @staticmethod
    def construct_event(payload: bytes, signature: str | None) -> dict[str, Any]:
        """Verify a webhook payload against STRIPE_WEBHOOK_SECRET.

        Returns:
            The verified event decoded as plain JSON

        Raises:
            ExternalServiceError: If the webhook secret is not configured
            ValidationFailedError: If the payload or signature is invalid
        """
        if not settings.STRIPE_WEBHOOK_SECRET:
            raise ExternalServiceError(
                "Stripe webhook secret not configured", service_name="stripe"
            )
        try:
            stripe.Webhook.construct_event(
                payload, signature or "", settings.STRIPE_WEBHOOK_SECRET
            )
        except ValueError as e:
            logger.warning("stripe_webhook_invalid_payload", error=str(e))
            raise ValidationFailedError("Invalid payload") from e
        except stripe.SignatureVerificationError as e:
            logger.warning("stripe_webhook_invalid_signature", error=str(e))
            raise ValidationFailedError("Invalid webhook signature") from e
        return json.loads(payload)


payment_service = PaymentService()
