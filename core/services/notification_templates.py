"""Email template configuration for transactional emails.

Maps each ``EmailCategory`` to a subject template and an HTML template path.
Subjects are ``str.format`` templates filled from the job's context.
"""

from typing import TypedDict

from core.enums import EmailCategory


class EmailTemplateConfig(TypedDict):
    """Configuration for an email template."""

    subject: str
    template: str


EMAIL_TEMPLATES: dict[str, EmailTemplateConfig] = {
    # Subscriptions
    EmailCategory.WELCOME.value: {
        "subject": "Welcome to NextGen MedPrep!",
        "template": "emails/welcome.html",
    },
    EmailCategory.SUBSCRIPTION_UPGRADE.value: {
        "subject": "Welcome to {tier_name} - Your NextGen MedPrep upgrade is complete!",
        "template": "emails/subscription_upgrade.html",
    },
    EmailCategory.UNSUBSCRIBE_CONFIRMATION.value: {
        "subject": "You've been unsubscribed from NextGen MedPrep",
        "template": "emails/unsubscribe_confirmation.html",
    },
    # Tutor applications
    EmailCategory.NEW_JOINER_CONFIRMATION.value: {
        "subject": "Application Received - NextGen MedPrep Tutor Program",
        "template": "emails/new_joiner_confirmation.html",
    },
    EmailCategory.NEW_JOINER_ADMIN_NOTIFICATION.value: {
        "subject": "New Tutor Application: {full_name}",
        "template": "emails/new_joiner_admin_notification.html",
    },
    # Personal statements
    EmailCategory.PERSONAL_STATEMENT_FEEDBACK.value: {
        "subject": "Your personal statement feedback is ready",
        "template": "emails/personal_statement_feedback.html",
    },
}


def render_subject(category: str, context: dict) -> str:
    """Fill the subject template, falling back to the raw template.

    Args:
        category: ``EmailCategory`` value
        context: Template parameters

    Returns:
        The rendered subject line

    Raises:
        KeyError: If the category has no template
    """
    subject = EMAIL_TEMPLATES[category]["subject"]
    try:
        return subject.format(**context)
    except KeyError:
        return subject
