from typing import Dict, Any

from mandrill_demo.core.config import AppConfig
from mandrill_demo.core.models import TemplateContent, TemplateDefinition


DEFAULT_TEMPLATE = "hello-template"
EDIT_REGION = "welcome_message"
GENERIC_EDIT_CONTENT = "<p>Welcome to <strong>{{company_name}}</strong>! We're glad to have you with us.</p>"


class UnknownTemplateError(KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown template: {self.name}"


TEMPLATES: Dict[str, Dict[str, Any]] = {
    "hello-template": {
        "subject": "Hello {{fname}}!",
        "code": (
            "<h1>Hello {{fname}}!</h1>\n"
            '<div mc:edit="welcome_message">\n'
            "  <p>Welcome to {{company_name}}.</p>\n"
            "</div>\n"
            "<p>Your account: {{account_id}}</p>"
        ),
        "text": "Hello {{fname}}!\n\nWelcome to {{company_name}}.\nYour account: {{account_id}}",
        "labels": ["demo", "hello"],
        "edit_content": (
            "<p>Thanks for joining <strong>{{company_name}}</strong>! "
            "We're excited to have you on board.</p>"
        ),
    },
    "qbo-invoice-template": {
        "subject": "Payment for invoice is requested",
        "code": (
            "<h1>Hi {{fname}},</h1><br/>DUE End of this month<br/>Bill to:{{fname}}\n"
            '<div mc:edit="welcome_message">\n'
            "  <p>Welcome to {{company_name}}.</p>\n"
            "</div>\n"
            "<br/>Powered by QuickBooks<br/>We appreciate your business! "
            "Payment for this invoice is due on month end for account {{account_id}}.<br/>"
            "If you have any questions or need help, just let us know.<br/>Best,<br/>QBO team"
        ),
        "text": (
            "Hi {{fname}},\nDUE End of this month\nBill to:{{fname}}\n\n"
            "Welcome to {{company_name}}.\n\n"
            "Powered by QuickBooks\n"
            "We appreciate your business! Payment for this invoice is due on month end "
            "for account {{account_id}}.\n"
            "If you have any questions or need help, just let us know.\nBest,\nQBO team"
        ),
        "labels": ["html", "invoice", "qbo"],
        "edit_content": (
            "<p>Welcome to <strong>{{company_name}}</strong>! "
            "This is a test invoice email for account {{account_id}}.</p>"
        ),
    },
}


def build_template_definition(config: AppConfig, name: str) -> TemplateDefinition:
    """Definition sent to templates/add. Stored as a draft (publish=False)."""
    template = TEMPLATES.get(name)
    if template is None:
        raise UnknownTemplateError(name)
    return TemplateDefinition(
        name=name,
        from_email=config.sender_email(),
        from_name=config.sender_name(),
        subject=template["subject"],
        code=template["code"],
        text=template["text"],
        publish=False,
        labels=list(template["labels"]),
    )


def template_edit_content(name: str) -> list[TemplateContent]:
    """
    mc:edit region overrides for a send-template call.

    Templates stored in the account but unknown to the catalogue get the
    generic welcome content for the welcome_message region.
    """
    template = TEMPLATES.get(name)
    content = template["edit_content"] if template else GENERIC_EDIT_CONTENT
    return [TemplateContent(name=EDIT_REGION, content=content)]
