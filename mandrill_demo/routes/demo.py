import os
from typing import List, Optional

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from mandrill_demo.core.config import load_config
from mandrill_demo.data.templates import DEFAULT_TEMPLATE, TEMPLATES
from mandrill_demo.dispatcher.service import OPERATIONS, DemoDispatcher, get_description
from mandrill_demo.observability.logger import log_warning
from mandrill_demo.rendering.reporter import format_status_html
from mandrill_demo.routes.health import update_last_dispatch
from mandrill_demo.services.mandrill_client import MandrillApiError, MissingApiKeyError, create_client


TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")
templates = Jinja2Templates(directory=TEMPLATE_DIR)

router = APIRouter()

MAX_TEMPLATE_CHOICES = 2


def get_dispatcher() -> DemoDispatcher:
    return DemoDispatcher(timeout=load_config().dispatch_timeout)


def fetch_template_choices() -> List[str]:
    """
    First template names from the vendor account.

    Returns an empty list when no API key is configured or the call fails.
    """
    try:
        client = create_client(load_config())
        stored = client.list_templates()
    except MissingApiKeyError:
        return []
    except MandrillApiError as exc:
        log_warning(f"Failed to fetch templates: {exc}")
        return []
    return [t.slug or t.name for t in stored[:MAX_TEMPLATE_CHOICES]]


def _render(request: Request, operation: str, status_html: Optional[str]) -> HTMLResponse:
    choices = fetch_template_choices() or list(TEMPLATES)
    context = {
        "operations": list(OPERATIONS),
        "selected": operation,
        "description": get_description(operation),
        "script_run_status": status_html,
        "templates": choices,
        "default_template": DEFAULT_TEMPLATE,
    }
    return templates.TemplateResponse(request, "index.html", context)


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    return _render(request, "single", None)


@router.post("/testEmailbasedOnScriptID", response_class=HTMLResponse)
def run_demo(
    request: Request,
    Script_name: Optional[str] = Form(None),
    firstName: Optional[str] = Form(None),
    lastName: Optional[str] = Form(None),
    companyName: Optional[str] = Form(None),
    membershipLevel: Optional[str] = Form(None),
    template_name: Optional[str] = Form(None),
):
    """Run the chosen demo script and re-render the form with its outcome."""
    params = {
        "firstName": firstName,
        "lastName": lastName,
        "companyName": companyName,
        "membershipLevel": membershipLevel,
        "template_name": template_name,
    }
    result = get_dispatcher().dispatch(Script_name, params)
    update_last_dispatch(result)
    return _render(request, Script_name or "", format_status_html(result.success, result.message))
