"""Sentry error monitoring for solver runs."""

import os
from typing import Any, Dict, Optional

import sentry_sdk
from dotenv import load_dotenv

from .engine.errors import MalformedInputError


def _drop_input_errors(event: Dict[str, Any], hint: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    # Bad problem files are user errors, not defects.
    exc_info = hint.get("exc_info")
    if exc_info and isinstance(exc_info[1], MalformedInputError):
        return None
    return event


def init_sentry(release: Optional[str] = None) -> bool:
    """Initialize Sentry error monitoring.

    Reads SENTRY_DSN and ENVIRONMENT from the environment (or a .env file).

    Returns:
        True if Sentry was initialized, False if DSN not configured.
    """
    load_dotenv()

    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=os.getenv("ENVIRONMENT", "development"),
        release=release,
        traces_sample_rate=0.1,
        attach_stacktrace=True,
        before_send=_drop_input_errors,
    )
    return True


def capture_exception(exception: Exception = None):
    """Capture an exception and send to Sentry.

    Args:
        exception: The exception to capture. If None, captures the current exception.
    """
    sentry_sdk.capture_exception(exception)


def capture_message(message: str, level: str = "info", **tags: str):
    """Send a message to Sentry, tagged with e.g. the problem file and status."""
    with sentry_sdk.new_scope() as scope:
        for key, value in tags.items():
            scope.set_tag(key, value)
        sentry_sdk.capture_message(message, level=level)


__all__ = ["init_sentry", "capture_exception", "capture_message"]
