from typing import Optional

from pydantic import BaseModel

from mandrill_demo.core.config import AppConfig
from mandrill_demo.core.models import TemplateInfo
from mandrill_demo.data.templates import UnknownTemplateError, build_template_definition
from mandrill_demo.observability.logger import log_warning
from mandrill_demo.services.mandrill_client import MandrillApiError, MandrillClient


class TemplateCreateResult(BaseModel):
    success: bool
    exists: bool = False
    info: Optional[TemplateInfo] = None
    error: Optional[str] = None


def template_exists(client: MandrillClient, name: str) -> bool:
    """True if the account holds a template with this slug or name. API errors count as absent."""
    try:
        templates = client.list_templates()
    except MandrillApiError as exc:
        log_warning(f"Could not list templates: {exc}", {"template": name})
        return False
    return any(name in (t.slug, t.name) for t in templates)


def create_template(client: MandrillClient, config: AppConfig, name: str) -> TemplateCreateResult:
    if template_exists(client, name):
        return TemplateCreateResult(success=True, exists=True)

    try:
        definition = build_template_definition(config, name)
    except UnknownTemplateError as exc:
        return TemplateCreateResult(success=False, error=str(exc))

    try:
        info = client.add_template(definition)
    except MandrillApiError as exc:
        return TemplateCreateResult(success=False, error=exc.message)
    return TemplateCreateResult(success=True, exists=False, info=info)


def ensure_template_exists(client: MandrillClient, config: AppConfig, name: str) -> bool:
    return create_template(client, config, name).success
