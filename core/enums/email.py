"""Email-related enumerations."""

from enum import Enum


class EmailLogStatus(str, Enum):
    """Delivery status recorded in the ``email_logs`` table."""

    SENT = "sent"
    FAILED = "failed"
    PENDING = "pending"
    BOUNCED = "bounced"


class EmailCategory(str, Enum):
    """Transactional emails sent outside of bulk campaigns.

    Each category maps to an entry of ``EMAIL_TEMPLATES``.
    """

    WELCOME = "WELCOME"
    SUBSCRIPTION_UPGRADE = "SUBSCRIPTION_UPGRADE"
    UNSUBSCRIBE_CONFIRMATION = "UNSUBSCRIBE_CONFIRMATION"
    NEW_JOINER_CONFIRMATION = "NEW_JOINER_CONFIRMATION"
    NEW_JOINER_ADMIN_NOTIFICATION = "NEW_JOINER_ADMIN_NOTIFICATION"
    PERSONAL_STATEMENT_FEEDBACK = "PERSONAL_STATEMENT_FEEDBACK"
