import json
import logging
from unittest.mock import patch

from mandrill_demo.core.config import AppConfig, load_config
from mandrill_demo.observability.logger import _sanitize_subject, init_sentry, log_event, timing


def test_log_event_is_single_json_line(caplog):
    with caplog.at_level(logging.INFO, logger="mandrill_demo"):
        log_event("sent", "messages/send", "Hello {{fname}}", 2, duration_ms=12.345, statuses=["sent", "queued"])

    entry = json.loads(caplog.records[-1].getMessage())
    assert entry["action"] == "sent"
    assert entry["operation"] == "messages/send"
    assert entry["subject"] == "Hello {{fname}}"
    assert entry["recipients_count"] == 2
    assert entry["duration_ms"] == 12.35
    assert entry["statuses"] == ["sent", "queued"]
    assert entry["timestamp"].endswith("Z")


def test_sanitize_subject():
    assert _sanitize_subject("Your password reset") == "[REDACTED]"
    assert _sanitize_subject("API Key rotated") == "[REDACTED]"
    assert _sanitize_subject("x" * 150) == "x" * 97 + "..."
    assert _sanitize_subject("Documents Attached") == "Documents Attached"


def test_timing_records_duration():
    with timing("op") as t:
        pass
    assert t.duration_ms is not None
    assert t.duration_ms >= 0


def test_sentry_disabled_by_default(clean_env):
    assert init_sentry() is False


def test_sentry_needs_dsn(clean_env):
    clean_env.setenv("OBS_ENABLED", "true")
    assert init_sentry() is False


def test_sentry_initialised(clean_env):
    clean_env.setenv("OBS_ENABLED", "true")
    clean_env.setenv("SENTRY_DSN", "https://public@example.ingest.sentry.io/1")
    with patch("mandrill_demo.observability.logger.sentry_sdk") as sdk:
        assert init_sentry() is True
        sdk.init.assert_called_once()


def test_load_config_reads_environment(clean_env):
    clean_env.setenv("MANDRILL_API_KEY", "k")
    clean_env.setenv("MANDRILL_BASE_URL", "http://localhost:9000/api/")
    clean_env.setenv("MANDRILL_TIMEOUT", "not-a-number")
    clean_env.setenv("DEFAULT_TO_EMAIL", "ada@acme.test")
    clean_env.setenv("DISPATCH_TIMEOUT", "45")

    config = load_config()

    assert config.mandrill_api_key == "k"
    assert config.mandrill_base_url == "http://localhost:9000/api"
    assert config.mandrill_timeout == 30.0
    assert config.recipient_email() == "ada@acme.test"
    assert config.recipient_name() == "Test Recipient"
    assert config.dispatch_timeout == 45.0


def test_empty_values_fall_back_to_placeholders():
    config = AppConfig(default_from_email="", default_to_email=None)
    assert config.sender_email() == "test@example.org"
    assert config.recipient_email() == "recipient@example.org"
