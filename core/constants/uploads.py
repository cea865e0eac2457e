"""Upload constraints for personal statements and reviewer feedback."""

MAX_UPLOAD_SIZE_BYTES = 10 * 1024 * 1024

ALLOWED_DOCUMENT_TYPES = {
    "application/pdf": ".pdf",
    "application/msword": ".doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
}

STATEMENT_PREFIX = "statements"
FEEDBACK_PREFIX = "feedback"

# Feedback emails link to the stored file for a week
FEEDBACK_LINK_EXPIRY_SECONDS = 7 * 24 * 60 * 60
