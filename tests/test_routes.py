from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

import mandrill_demo.routes.health
from mandrill_demo.core.models import TemplateInfo
from mandrill_demo.dispatcher.service import DispatchResult
from mandrill_demo.main import app
from mandrill_demo.routes.demo import fetch_template_choices
from mandrill_demo.services.mandrill_client import MandrillApiError


@pytest.fixture
def client(clean_env):
    mandrill_demo.routes.health._last_dispatch = None
    return TestClient(app)


class TestForm:
    """The demo form page and its submission endpoint."""

    def test_index_renders_form(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert 'action="/testEmailbasedOnScriptID"' in response.text
        assert 'value="mergeTags"' in response.text
        assert "hello-template" in response.text
        assert "single recipient" in response.text

    def test_unknown_operation_renders_error(self, client):
        with patch("subprocess.run") as run:
            response = client.post("/testEmailbasedOnScriptID", data={"Script_name": "bogus"})

        assert response.status_code == 200
        assert "status-error" in response.text
        assert "Unknown script type" in response.text
        run.assert_not_called()

    def test_success_renders_output(self, client):
        result = DispatchResult(
            success=True,
            message="Email sent successfully! Output: ada@acme.test: sent",
            operation="mergeTags",
            output="ada@acme.test: sent",
            exit_code=0,
        )
        with patch("mandrill_demo.dispatcher.service.DemoDispatcher.dispatch", return_value=result) as dispatch:
            response = client.post(
                "/testEmailbasedOnScriptID",
                data={"Script_name": "mergeTags", "firstName": "Ada", "companyName": "Acme"},
            )

        assert response.status_code == 200
        assert "status-success" in response.text
        assert "ada@acme.test: sent" in response.text
        operation, params = dispatch.call_args[0]
        assert operation == "mergeTags"
        assert params["firstName"] == "Ada"
        assert params["companyName"] == "Acme"
        assert params["lastName"] is None

    def test_script_failure_shows_output(self, client):
        result = DispatchResult(
            success=False,
            message="Script failed: Mandrill API Error: Invalid API key",
            operation="single",
            output="Mandrill API Error: Invalid API key",
            exit_code=1,
        )
        with patch("mandrill_demo.dispatcher.service.DemoDispatcher.dispatch", return_value=result):
            response = client.post("/testEmailbasedOnScriptID", data={"Script_name": "single"})

        assert "status-error" in response.text
        assert "Invalid API key" in response.text


class TestTemplateChoices:
    def test_no_api_key_gives_empty_list(self, clean_env):
        assert fetch_template_choices() == []

    def test_first_two_templates(self, clean_env):
        clean_env.setenv("MANDRILL_API_KEY", "k")
        stored = [TemplateInfo(name=f"t{i}", slug=f"t{i}") for i in range(3)]
        with patch("mandrill_demo.services.mandrill_client.MandrillClient.list_templates", return_value=stored):
            assert fetch_template_choices() == ["t0", "t1"]

    def test_vendor_error_gives_empty_list(self, clean_env):
        clean_env.setenv("MANDRILL_API_KEY", "k")
        with patch(
            "mandrill_demo.services.mandrill_client.MandrillClient.list_templates",
            side_effect=MandrillApiError("Invalid API key"),
        ):
            assert fetch_template_choices() == []


class TestHealth:
    def test_healthz_without_dispatch(self, client):
        response = client.get("/healthz")

        data = response.json()
        assert response.status_code == 200
        assert data["status"] == "ok"
        assert data["api_key_configured"] is False
        assert "last_dispatch" not in data
        assert data["observability"] == {"enabled": False, "sentry_configured": False}

    def test_healthz_reports_last_dispatch(self, client):
        with patch("subprocess.run") as run:
            client.post("/testEmailbasedOnScriptID", data={"Script_name": "bogus"})
            run.assert_not_called()

        data = client.get("/healthz").json()
        assert data["last_dispatch"]["operation"] == "bogus"
        assert data["last_dispatch"]["success"] is False
        assert data["last_dispatch"]["error"] == "Unknown script type"

    def test_liveness(self, client):
        assert client.get("/healthz/live").json()["status"] == "alive"
