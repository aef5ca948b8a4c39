"""Shared constants for the documentation access gate."""

# Routing
DEFAULT_PATH = "/swagger/*any"
DOC_FILENAME = "doc.json"
UI_METHODS = ["GET", "HEAD", "OPTIONS"]
DOC_METHODS = ["GET"]

# Request headers
TOKEN_HEADER = "X-API-TOKEN"
FORWARDED_FOR_HEADER = "x-forwarded-for"

# Denial reasons
REASON_DISABLED = "feature disabled"
REASON_ADDRESS_NOT_ALLOWED = "address not allowed"
REASON_TOKEN_REJECTED = "unauthorized access"
