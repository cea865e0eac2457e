"""Background jobs for sending transactional emails.

Jobs receive only plain data (category, address, context) so they can be
pickled onto the queue; the email is rendered from the template registry
when the worker picks it up.
"""

import smtplib

from django.conf import settings
from django.template.loader import render_to_string

import structlog

from core.services.email_service import EmailService
from core.services.notification_templates import EMAIL_TEMPLATES, render_subject

logger = structlog.get_logger(__name__)


def send_email_job(category: str, to_email: str, context: dict | None = None) -> bool:
    """Render and send one transactional email.

    Executed by RQ workers. Failures are logged and re-raised so RQ moves
    the job to its failed registry, where it can be inspected or requeued.

    Args:
        category: ``EmailCategory`` value selecting the template
        to_email: Recipient address
        context: Template parameters

    Returns:
        True when the email was sent, False when the category is unknown.

    Raises:
        smtplib.SMTPException: If the SMTP server rejects the message.
        ValueError: If the recipient address is invalid.
    """
    template_config = EMAIL_TEMPLATES.get(category)
    if not template_config:
        logger.error("template_not_found", category=category, to_email=to_email)
        return False

    data = {"frontend_url": settings.FRONTEND_URL, **(context or {})}
    subject = render_subject(category, data)
    html_content = render_to_string(template_config["template"], data)

    try:
        EmailService().send_email(
            to_email=to_email,
            subject=subject,
            html_content=html_content,
        )
    except (smtplib.SMTPException, ValueError) as e:
        logger.error(
            "transactional_email_failed",
            category=category,
            to_email=to_email,
            error=str(e),
        )
        raise

    logger.info("transactional_email_sent", category=category, to_email=to_email)
    return True
