"""
Application-level constants for hardcoded business logic.

These values define the public contract of the API (response messages and
envelope discriminators) and should NEVER be changed via environment
variables. For configurable values see novels_api/settings.py.
"""

# ============================================================================
# Response Envelope
# ============================================================================

ENVELOPE_SUCCESS = "success"
ENVELOPE_ERROR = "error"


# ============================================================================
# Error Messages
# ============================================================================

CONFLICT_MESSAGE = (
    "A resource with the following fields already exists in the database."
)
VALIDATION_MESSAGE = "Missing required fields."
NOT_FOUND_MESSAGE = "Resource not found."
BAD_REQUEST_MESSAGE = "Bad request. Please provide all the fields"
INTERNAL_ERROR_MESSAGE = "An error occurred"


# ============================================================================
# Success Messages
# ============================================================================

PATCH_SUCCESS_MESSAGE = "Update successful"


# ============================================================================
# Request Tracing
# ============================================================================

# Correlation IDs are truncated to this many characters
CORRELATION_ID_LENGTH = 8

CORRELATION_ID_HEADER = "X-Correlation-ID"

# Log messages above this size are truncated by the JSON formatter
MAX_LOG_SIZE_BYTES = 100_000


# ============================================================================
# Identifiers
# ============================================================================

# Largest value a 32-bit INTEGER primary key column can hold
MAX_RESOURCE_ID = 2**31 - 1
