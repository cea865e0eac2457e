"""Constants for recipient resolution and bulk email dispatch."""

# Recipients per bulk SMTP message
BATCH_SIZE = 50

# Row caps applied when scanning the subscriptions table
SUBSCRIPTION_FETCH_LIMIT = 1000
STATS_FETCH_LIMIT = 10000

# Tiers reported individually by the email stats endpoint
STATS_TIERS = ("free", "medical_free", "dentist_free")
