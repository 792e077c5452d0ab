from prometheus_client import Counter

# Handled text messages by detection kind.
UPDATE_TOTAL = Counter(
    "guid_bot_updates_total",
    "Total number of Telegram text messages handled",
    ["kind"],
)

# Reply messages sent back to Telegram.
REPLY_TOTAL = Counter(
    "guid_bot_replies_total",
    "Total number of reply messages sent",
)

# Failures by stage (webhook deserialization or update handler).
ERROR_TOTAL = Counter(
    "guid_bot_errors_total",
    "Total number of failed updates",
    ["stage"],
)
