"""Email service for sending mail via SMTP."""

import re
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from django.conf import settings

import structlog

logger = structlog.get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class EmailService:
    """Service for sending emails via SMTP.

    Single-recipient messages are used for transactional mail; bulk
    messages put every recipient in BCC so subscribers never see each
    other's addresses.
    """

    def __init__(self) -> None:
        """Initialize email service with SMTP configuration."""
        self.smtp_host = settings.EMAIL_HOST
        self.smtp_port = settings.EMAIL_PORT
        self.smtp_user = settings.EMAIL_HOST_USER
        self.smtp_password = settings.EMAIL_HOST_PASSWORD
        self.use_tls = settings.EMAIL_USE_TLS
        self.from_email = settings.DEFAULT_FROM_EMAIL

    def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        from_email: str | None = None,
    ) -> bool:
        """Send an email to a single recipient.

        Args:
            to_email: Recipient email address
            subject: Email subject line
            html_content: HTML email content
            from_email: Sender email (defaults to DEFAULT_FROM_EMAIL)

        Returns:
            True once the SMTP server accepted the message

        Raises:
            ValueError: If email address is invalid
            smtplib.SMTPException: If SMTP operation fails
        """
        if not self.is_valid_email(to_email):
            error_msg = f"Invalid email address: {to_email}"
            raise ValueError(error_msg)

        msg = self._build_message(subject, html_content, from_email)
        msg["To"] = to_email

        self._deliver(msg, [to_email])
        logger.info("email_sent", to_email=to_email, subject=subject)
        return True

    def send_bulk_email(
        self,
        recipients: list[str],
        subject: str,
        html_content: str,
        from_email: str | None = None,
    ) -> bool:
        """Send one message to many recipients, all in BCC.

        The visible ``To`` header is the sender itself. The whole call either
        succeeds or raises. When the server refuses only some addresses the
        message has still gone to the rest, yet ``SMTPRecipientsRefused`` is
        raised and the caller counts every recipient of the batch as failed.
        Callers that want per-address results must send one message each.

        Args:
            recipients: Recipient addresses
            subject: Email subject line
            html_content: HTML email content
            from_email: Sender email (defaults to DEFAULT_FROM_EMAIL)

        Returns:
            True once the SMTP server accepted every recipient

        Raises:
            ValueError: If ``recipients`` is empty
            smtplib.SMTPException: If SMTP operation fails
        """
        if not recipients:
            raise ValueError("Bulk email requires at least one recipient")

        msg = self._build_message(subject, html_content, from_email)
        msg["To"] = msg["From"]

        refused = self._deliver(msg, recipients)
        if refused:
            raise smtplib.SMTPRecipientsRefused(refused)

        logger.info(
            "bulk_email_sent",
            recipient_count=len(recipients),
            subject=subject,
        )
        return True

    def verify_connection(self) -> bool:
        """Check that the SMTP server accepts our credentials.

        Returns:
            True if a connection and login succeed, False otherwise
        """
        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=10) as server:
                if self.use_tls:
                    server.starttls()
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.noop()
        except (smtplib.SMTPException, OSError) as e:
            logger.warning(
                "smtp_verification_failed",
                smtp_host=self.smtp_host,
                error=str(e),
            )
            return False

        logger.info("smtp_verification_succeeded", smtp_host=self.smtp_host)
        return True

    @staticmethod
    def is_valid_email(email: str) -> bool:
        """Validate email address format.

        Args:
            email: Email address to validate

        Returns:
            True if email is valid, False otherwise
        """
        return bool(email) and bool(EMAIL_PATTERN.match(email))

    def _build_message(
        self, subject: str, html_content: str, from_email: str | None
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = from_email or self.from_email
        msg.attach(MIMEText(self._html_to_plain(html_content), "plain"))
        msg.attach(MIMEText(html_content, "html"))
        return msg

    def _deliver(self, msg: MIMEMultipart, recipients: list[str]) -> dict:
        """Open an SMTP session and send ``msg`` to ``recipients``.

        Returns:
            Recipients refused by the server, keyed by address
        """
        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                if self.use_tls:
                    server.starttls()

                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)

                return server.send_message(msg, to_addrs=recipients) or {}

        except smtplib.SMTPException as e:
            logger.error(
                "email_send_failed",
                recipient_count=len(recipients),
                subject=msg["Subject"],
                error=str(e),
            )
            raise

    def _html_to_plain(self, html: str) -> str:
        """Convert HTML to plain text.

        Args:
            html: HTML content

        Returns:
            Plain text version of the HTML
        """
        text = re.sub(r"<br\s*/?>|</p>", "\n", html, flags=re.IGNORECASE)
        text = re.sub(r"<[^>]+>", "", text)

        for entity, char in (
            ("&nbsp;", " "),
            ("&lt;", "<"),
            ("&gt;", ">"),
            ("&quot;", '"'),
            ("&#39;", "'"),
            ("&amp;", "&"),
        ):
            text = text.replace(entity, char)

        text = re.sub(r"\n\s*\n", "\n\n", text)
        return text.strip()
