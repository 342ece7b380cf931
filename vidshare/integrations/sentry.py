# =============================================================================
# Sentry Error Tracking Integration
# =============================================================================
#
# Setup:
#   1. pip install "vidshare[sentry]"
#   2. Set SENTRY_DSN=https://...@sentry.io/... in the environment or .env
#
# Usage:
#   init_sentry() is called from the app lifespan. Server errors are
#   reported through capture_exception(); client errors never are.
#
# =============================================================================

from __future__ import annotations

import logging

from vidshare.config import Settings, get_settings
from vidshare.core.errors import VidshareError

logger = logging.getLogger(__name__)

# Sentry SDK is optional - gracefully degrade if not installed
try:
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.logging import LoggingIntegration
    from sentry_sdk.integrations.starlette import StarletteIntegration
    SENTRY_AVAILABLE = True
except ImportError:
    SENTRY_AVAILABLE = False
    sentry_sdk = None

_SCRUBBED_HEADERS = ("authorization", "cookie")
_SCRUBBED_FIELDS = ("password", "password_hash", "token")


def init_sentry(settings: Settings | None = None) -> bool:
    """
    Initialize Sentry error tracking.

    Returns True if initialized, False if skipped.
    """
    if not SENTRY_AVAILABLE:
        logger.info("Sentry SDK not installed - error tracking disabled")
        return False

    settings = settings or get_settings()

    if not settings.sentry_dsn:
        logger.info("SENTRY_DSN not set - error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        traces_sample_rate=0.1 if settings.is_production else 1.0,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            StarletteIntegration(transaction_style="endpoint"),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        # Never ship credentials
        send_default_pii=False,
        before_send=_filter_events,
    )

    logger.info("Sentry initialized for %s", settings.environment)
    return True


def _filter_events(event: dict, hint: dict) -> dict | None:
    """Drop client errors and scrub credentials."""
    if "exc_info" in hint:
        _, exc_value, _ = hint["exc_info"]
        if isinstance(exc_value, VidshareError) and exc_value.status_code < 500:
            return None

    request = event.get("request") or {}
    headers = request.get("headers") or {}
    for key in list(headers.keys()):
        if key.lower() in _SCRUBBED_HEADERS:
            headers[key] = "[Filtered]"
    data = request.get("data")
    if isinstance(data, dict):
        for key in list(data.keys()):
            if key.lower() in _SCRUBBED_FIELDS:
                data[key] = "[Filtered]"

    return event


def capture_exception(error: Exception) -> str | None:
    """
    Report a server-side error.

    Returns the Sentry event ID if captured, None otherwise.
    """
    if not SENTRY_AVAILABLE or not sentry_sdk.get_client().is_active():
        logger.error("Unhandled error (Sentry disabled)", exc_info=error)
        return None
    return sentry_sdk.capture_exception(error)
