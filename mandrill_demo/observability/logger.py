import os
import sys
import time
import json
import logging
from contextlib import contextmanager
from typing import Dict, Any, Optional
from datetime import datetime, timezone

# Import sentry_sdk at module level for testing
try:
    import sentry_sdk
except ImportError:
    sentry_sdk = None

logger = logging.getLogger("mandrill_demo")

_SENSITIVE_PATTERNS = ("password", "secret", "key", "token", "auth", "credential")


class TimingContext:
    """Context manager for timing a vendor call or a dispatched script."""

    def __init__(self, operation_name: str):
        self.operation_name = operation_name
        self.start_time: Optional[float] = None
        self.duration_ms: Optional[float] = None

    def __enter__(self):
        self.start_time = time.monotonic()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is not None:
            self.duration_ms = (time.monotonic() - self.start_time) * 1000


@contextmanager
def timing(operation_name: str):
    context = TimingContext(operation_name)
    with context:
        yield context


def configure_script_logging(level: int = logging.INFO) -> None:
    """Send log lines to stderr so script stdout only carries the report."""
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s %(message)s")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _emit(level: int, entry: Dict[str, Any]) -> None:
    logger.log(level, json.dumps(entry, separators=(",", ":"), default=str))


def log_event(
    action: str,
    operation: str,
    subject: Optional[str],
    recipients_count: int,
    duration_ms: Optional[float] = None,
    **kwargs
) -> None:
    """
    Log a structured event for a vendor call or a dispatch.

    Args:
        action: What happened (e.g. 'sent', 'template_created', 'dispatched', 'failed')
        operation: Vendor endpoint or demo operation id
        subject: Message subject, sanitised before logging
        recipients_count: Number of recipients in the request
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields to include in the log line
    """
    entry = {
        "timestamp": _now(),
        "action": action,
        "operation": operation,
        "subject": _sanitize_subject(subject or ""),
        "recipients_count": recipients_count,
    }
    if duration_ms is not None:
        entry["duration_ms"] = round(duration_ms, 2)
    entry.update(kwargs)
    _emit(logging.INFO, entry)


def _sanitize_subject(subject: str) -> str:
    """Redact subjects that look like they carry secrets and truncate long ones."""
    lowered = subject.lower()
    if any(pattern in lowered for pattern in _SENSITIVE_PATTERNS):
        return "[REDACTED]"
    if len(subject) > 100:
        return subject[:97] + "..."
    return subject


def init_sentry() -> bool:
    """
    Initialize Sentry if OBS_ENABLED=true and SENTRY_DSN is provided.

    Returns:
        True if Sentry was initialized, False otherwise
    """
    if os.getenv("OBS_ENABLED", "false").lower() != "true":
        return False

    sentry_dsn = os.getenv("SENTRY_DSN")
    if not sentry_dsn:
        logger.info("Sentry DSN not provided, skipping Sentry initialization")
        return False

    if sentry_sdk is None:
        logger.warning("Sentry SDK not installed, skipping Sentry initialization")
        return False

    try:
        from sentry_sdk.integrations.fastapi import FastApiIntegration
        from sentry_sdk.integrations.logging import LoggingIntegration

        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FastApiIntegration(),
                LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
            ],
            traces_sample_rate=0.1,
            environment=os.getenv("ENVIRONMENT", "development"),
        )
        logger.info("Sentry initialized successfully")
        return True
    except Exception as e:
        logger.error(f"Failed to initialize Sentry: {e}")
        return False


def log_error(error: Exception, context: Dict[str, Any] = None) -> None:
    entry = {
        "timestamp": _now(),
        "level": "ERROR",
        "error": str(error),
        "error_type": type(error).__name__,
    }
    if context:
        entry.update(context)
    _emit(logging.ERROR, entry)


def log_warning(message: str, context: Dict[str, Any] = None) -> None:
    entry = {"timestamp": _now(), "level": "WARNING", "message": message}
    if context:
        entry.update(context)
    _emit(logging.WARNING, entry)

