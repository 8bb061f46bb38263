"""
Thin client for the Mailchimp Transactional (Mandrill) JSON API.

Each method performs exactly one POST. There is no retry or backoff: a
failure is reported to the caller as MandrillApiError and the invocation ends.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from mandrill_demo.core.config import AppConfig, DEFAULT_BASE_URL
from mandrill_demo.core.models import (
    MessageRequest,
    SendResult,
    TemplateContent,
    TemplateDefinition,
    TemplateInfo,
)
from mandrill_demo.observability.logger import log_error, log_event, timing


class MissingApiKeyError(RuntimeError):
    def __init__(self, message: str = "MANDRILL_API_KEY not found in environment variables!"):
        super().__init__(message)


class MandrillApiError(Exception):
    """An error answer from the vendor, or a transport failure reaching it."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        name: Optional[str] = None,
        code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.name = name
        self.code = code
        self.response_body = response_body


class MandrillClient:
    driver = "mandrill"

    def __init__(self, api_key: str, base_url: str = DEFAULT_BASE_URL, timeout: float = 30.0):
        if not api_key:
            raise MissingApiKeyError()
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _call(self, path: str, params: Dict[str, Any]) -> Any:
        url = f"{self.base_url}/{path}.json"
        body = {"key": self.api_key, **params}
        try:
            with httpx.Client(timeout=self.timeout) as client:
                resp = client.post(url, json=body)
        except httpx.HTTPError as exc:
            log_error(exc, {"endpoint": path})
            raise MandrillApiError(f"Request to {path} failed: {exc}") from exc

        if resp.status_code == 200:
            try:
                return resp.json()
            except ValueError as exc:
                raise MandrillApiError(
                    f"Invalid JSON from {path}", status_code=resp.status_code, response_body=resp.text
                ) from exc
        raise self._error_from_response(path, resp)

    @staticmethod
    def _error_from_response(path: str, resp: httpx.Response) -> MandrillApiError:
        try:
            data = resp.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and data.get("message"):
            error = MandrillApiError(
                data["message"],
                status_code=resp.status_code,
                name=data.get("name"),
                code=data.get("code"),
                response_body=resp.text,
            )
        else:
            error = MandrillApiError(
                f"{resp.status_code} {resp.text}",
                status_code=resp.status_code,
                response_body=resp.text,
            )
        log_error(error, {"endpoint": path, "status_code": resp.status_code, "error_name": error.name})
        return error

    def _send(self, path: str, message: MessageRequest, params: Dict[str, Any]) -> List[SendResult]:
        message.ensure_sendable()
        params = {"message": message.to_payload(), **params}
        if message.send_at and "send_at" not in params:
            params["send_at"] = message.send_at
        with timing(path) as t:
            data = self._call(path, params)
        if not isinstance(data, list):
            raise MandrillApiError(f"Unexpected result structure: {data}")
        results = [SendResult.model_validate(item) for item in data]
        log_event(
            "sent",
            path,
            message.subject,
            len(message.to),
            duration_ms=t.duration_ms,
            statuses=[r.status for r in results],
        )
        return results

    def send_message(
        self,
        message: MessageRequest,
        send_async: bool = False,
        ip_pool: Optional[str] = None,
        send_at: Optional[str] = None,
    ) -> List[SendResult]:
        params: Dict[str, Any] = {"async": send_async}
        if ip_pool:
            params["ip_pool"] = ip_pool
        if send_at:
            params["send_at"] = send_at
        return self._send("messages/send", message, params)

    def send_template(
        self,
        template_name: str,
        template_content: List[TemplateContent],
        message: MessageRequest,
    ) -> List[SendResult]:
        params = {
            "template_name": template_name,
            "template_content": [c.model_dump() for c in template_content],
        }
        return self._send("messages/send-template", message, params)

    def add_template(self, definition: TemplateDefinition) -> TemplateInfo:
        data = self._call("templates/add", definition.model_dump(exclude_none=True))
        log_event("template_created", "templates/add", definition.subject, 0, template=definition.name)
        return TemplateInfo.model_validate(data)

    def list_templates(self, label: Optional[str] = None) -> List[TemplateInfo]:
        params = {"label": label} if label else {}
        data = self._call("templates/list", params)
        return [TemplateInfo.model_validate(item) for item in data or []]

    def template_info(self, name: str) -> TemplateInfo:
        return TemplateInfo.model_validate(self._call("templates/info", {"name": name}))

    def delete_template(self, name: str) -> TemplateInfo:
        data = self._call("templates/delete", {"name": name})
        log_event("template_deleted", "templates/delete", None, 0, template=name)
        return TemplateInfo.model_validate(data)


def create_client(config: AppConfig) -> MandrillClient:
    """Build a client from config. Raises MissingApiKeyError before any network call."""
    if not config.mandrill_api_key:
        raise MissingApiKeyError()
    return MandrillClient(
        api_key=config.mandrill_api_key,
        base_url=config.mandrill_base_url,
        timeout=config.mandrill_timeout,
    )
