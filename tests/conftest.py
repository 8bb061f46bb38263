import json

import pytest


class FakeResponse:
    """Stands in for httpx.Response in client tests."""

    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload
        self.text = payload if isinstance(payload, str) else json.dumps(payload)

    def json(self):
        if isinstance(self._payload, str):
            raise ValueError("not json")
        return self._payload


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the config layer reads."""
    for name in (
        "MANDRILL_API_KEY",
        "MANDRILL_BASE_URL",
        "MANDRILL_TIMEOUT",
        "DEFAULT_FROM_EMAIL",
        "DEFAULT_FROM_NAME",
        "DEFAULT_TO_EMAIL",
        "DEFAULT_TO_NAME",
        "ATTACHMENT_DIR",
        "DISPATCH_TIMEOUT",
        "OBS_ENABLED",
        "SENTRY_DSN",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
