"""Global constants for the e-Report resilience layer.

Centralizes magic numbers used throughout the codebase,
making them discoverable, consistent, and easy to modify.
"""

# =============================================================================
# Retry Defaults
# =============================================================================

DEFAULT_MAX_ATTEMPTS = 3
"""Retries after the initial call made by execute_with_retry()."""

DEFAULT_BASE_DELAY_SECONDS = 1.0
"""Linear backoff unit: retry N waits N * base delay."""

# =============================================================================
# Observability
# =============================================================================

DEFAULT_ERROR_LOG_CAPACITY = 200
"""Maximum entries kept in the error log ring buffer."""

DEFAULT_RECENT_ERRORS = 10
"""Default number of entries returned by get_recent_errors()."""

NOTIFICATION_DISMISS_SECONDS = 5.0
"""Seconds before a transient error notification removes itself."""

TRUNCATE_CAUSE_REPR_CHARS = 500
"""Maximum characters of the serialized original cause written to logs."""

# =============================================================================
# Transport / Session
# =============================================================================

DEFAULT_API_BASE_URL = "http://localhost:8081"
"""Backend base URL when neither config nor EREPORT_API_URL set one."""

DEFAULT_API_TIMEOUT_SECONDS = 10.0
"""Per-request timeout for the API client."""

DEFAULT_TOKEN_KEY = "e-report-token"
"""Session storage key of the access token."""

DEFAULT_REFRESH_TOKEN_KEY = "e-report-refresh-token"
"""Session storage key of the refresh token."""

DEFAULT_LOGIN_PATH = "/login"
"""Login entry point used by the redirect recovery action."""
