"""
Message builders for the demo operations.

Every builder takes the loaded AppConfig plus explicit keyword overrides and
returns a MessageRequest. Nothing here talks to the network.
"""

import json
import os
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

from mandrill_demo.core.config import AppConfig
from mandrill_demo.core.models import (
    Attachment,
    MergeVar,
    MessageRequest,
    Recipient,
    RecipientMergeVars,
    TemplateContent,
)
from mandrill_demo.data.templates import template_edit_content
from mandrill_demo.messages.attachments import attachment_from_file, attachment_from_text
from mandrill_demo.observability.logger import log_warning


DEFAULT_COMPANY_NAME = "Intuit Developer Program"
DEFAULT_MEMBERSHIP_LEVEL = "Premium"
DEFAULT_FIRST_NAME = "John"
DEFAULT_LAST_NAME = "Smith"
DEFAULT_ACCOUNT_ID = "ACC-001"

SAMPLE_PDF = "sample.pdf"
SEND_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


def default_attachment_dir(config: AppConfig) -> str:
    if config.attachment_dir:
        return config.attachment_dir
    return os.path.join(os.path.dirname(os.path.dirname(__file__)), "data")


def default_recipient(config: AppConfig) -> Recipient:
    if not config.default_to_email:
        log_warning(
            "DEFAULT_TO_EMAIL not set, sending to placeholder recipient",
            {"recipient": config.recipient_email()},
        )
    return Recipient(email=config.recipient_email(), name=config.recipient_name(), type="to")


def _reply_to(config: AppConfig, **extra: str) -> dict:
    return {"Reply-To": config.sender_email(), **extra}


def _or_default(value: Optional[str], default: str) -> str:
    return value if value else default


def build_single_message(config: AppConfig) -> MessageRequest:
    return MessageRequest(
        html="<p>Hello HTML world!</p>",
        text="Hello plain world!",
        subject="Hello world",
        from_email=config.sender_email(),
        from_name=config.sender_name(),
        to=[default_recipient(config)],
        headers=_reply_to(config),
    )


def build_advanced_message(config: AppConfig) -> MessageRequest:
    return MessageRequest(
        html="<p>Hello <strong>HTML</strong> world!</p>",
        text="Hello plain world!",
        subject="Advanced Email Test",
        from_email=config.sender_email(),
        from_name=config.sender_name(),
        to=[default_recipient(config)],
        headers=_reply_to(config, **{"X-MC-Track": "opens,clicks"}),
        important=True,
        track_opens=True,
        track_clicks=True,
        auto_text=True,
        auto_html=False,
        inline_css=True,
        tags=["welcome", "single-recipient", "python"],
        metadata={"user_id": "12345", "campaign": "welcome-series", "language": "python"},
    )


def build_merge_tags_message(
    config: AppConfig,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    company_name: Optional[str] = None,
    membership_level: Optional[str] = None,
) -> MessageRequest:
    """
    Personalised message using handlebars merge tags.

    Global vars apply to every recipient; the per-recipient vars are keyed on
    the default recipient's address. Empty overrides fall back to defaults.
    """
    recipient = default_recipient(config)
    html = (
        "<h1>Welcome {{fname}}!</h1>\n"
        "<p>Hi {{fname}} {{lname}},</p>\n"
        "<p>Thanks for joining the {{company_name}}! Your account is now active.</p>\n"
        "<p>Your membership level: {{membership_level}}</p>\n"
        "<p>Best regards,<br>The {{company_name}} Team</p>"
    )
    text = (
        "Welcome {{fname}}!\n\n"
        "Hi {{fname}} {{lname}},\n\n"
        "Thanks for joining the {{company_name}}! Your account is now active.\n"
        "Your membership level: {{membership_level}}\n\n"
        "Best regards,\n"
        "The {{company_name}} Team"
    )
    return MessageRequest(
        html=html,
        text=text,
        subject="Welcome to {{company_name}}, {{fname}}!",
        from_email=config.sender_email(),
        from_name=config.sender_name(),
        to=[recipient],
        headers=_reply_to(config),
        global_merge_vars=[
            MergeVar(name="company_name", content=_or_default(company_name, DEFAULT_COMPANY_NAME)),
            MergeVar(name="membership_level", content=_or_default(membership_level, DEFAULT_MEMBERSHIP_LEVEL)),
        ],
        merge_vars=[
            RecipientMergeVars(
                rcpt=recipient.email,
                vars=[
                    MergeVar(name="fname", content=_or_default(first_name, DEFAULT_FIRST_NAME)),
                    MergeVar(name="lname", content=_or_default(last_name, DEFAULT_LAST_NAME)),
                ],
            )
        ],
        merge_language="handlebars",
    )


def build_multi_recipient_merge_message(config: AppConfig) -> MessageRequest:
    people = [
        ("john@example.org", "John Smith", "John", "ACC-001", "Premium"),
        ("jane@example.org", "Jane Doe", "Jane", "ACC-002", "Standard"),
    ]
    return MessageRequest(
        html=(
            "<h1>Welcome {{fname}}!</h1>\n"
            "<p>Your account {{account_id}} is now active.</p>\n"
            "<p>Membership: {{membership_level}}</p>\n"
            "<p>Join us at {{company_name}}!</p>"
        ),
        subject="Welcome {{fname}} to {{company_name}}!",
        from_email=config.sender_email(),
        from_name=config.sender_name(),
        to=[Recipient(email=email, name=name) for email, name, _, _, _ in people],
        global_merge_vars=[MergeVar(name="company_name", content=DEFAULT_COMPANY_NAME)],
        merge_vars=[
            RecipientMergeVars(
                rcpt=email,
                vars=[
                    MergeVar(name="fname", content=fname),
                    MergeVar(name="account_id", content=account_id),
                    MergeVar(name="membership_level", content=level),
                ],
            )
            for email, _, fname, account_id, level in people
        ],
        merge_language="handlebars",
    )


def _readme_text(now: datetime) -> str:
    return "\n".join([
        "This is a demo text file created by the Mandrill demo.",
        "",
        f"Generated at: {now.isoformat()}",
        "This file was created using Python.",
        "",
        "Thank you for using Mandrill!",
    ])


def build_attachments_message(
    config: AppConfig,
    attachment_dir: Optional[str] = None,
    now: Optional[datetime] = None,
) -> MessageRequest:
    """Attach sample.pdf when it can be read, plus a generated readme.txt."""
    now = now or datetime.now(timezone.utc)
    directory = attachment_dir or default_attachment_dir(config)

    attachments: List[Attachment] = []
    pdf = attachment_from_file(os.path.join(directory, SAMPLE_PDF))
    if pdf is not None:
        attachments.append(pdf)
    attachments.append(attachment_from_text("readme.txt", _readme_text(now)))

    message = MessageRequest(
        html=(
            "<h1>Your Documents</h1>\n"
            "<p>Please find the attached files for your review.</p>\n"
            "<ul>\n"
            "  <li>Sample PDF document (if available)</li>\n"
            "  <li>Readme text file</li>\n"
            "</ul>\n"
            "<p>These files have been sent via Mandrill Transactional Email.</p>"
        ),
        text="Your documents are attached. Please review them at your convenience.",
        subject="Documents Attached",
        from_email=config.sender_email(),
        from_name=config.sender_name(),
        to=[default_recipient(config)],
        attachments=attachments,
        tags=["attachments", "outbound-documents"],
    )
    message.ensure_sendable()
    return message


def build_csv_report_message(config: AppConfig) -> MessageRequest:
    csv_content = "\n".join([
        "Name,Email,Status,Joined",
        "John Smith,john@example.org,Active,2024-01-15",
        "Jane Doe,jane@example.org,Active,2024-02-20",
        "Bob Johnson,bob@example.org,Pending,2024-03-10",
    ])
    return MessageRequest(
        html="<h1>User Report</h1><p>Please find the attached CSV report.</p>",
        text="User Report - CSV file attached.",
        subject="User Report - CSV Attached",
        from_email=config.sender_email(),
        from_name="Report Service",
        to=[Recipient(email=config.recipient_email())],
        attachments=[attachment_from_text("user_report.csv", csv_content)],
        tags=["report", "csv"],
    )


def build_json_data_message(config: AppConfig, now: Optional[datetime] = None) -> MessageRequest:
    now = now or datetime.now(timezone.utc)
    data = {
        "status": "success",
        "total_users": 42,
        "active_users": 38,
        "timestamp": now.isoformat(),
        "users": [
            {"name": "John", "email": "john@example.org"},
            {"name": "Jane", "email": "jane@example.org"},
        ],
    }
    return MessageRequest(
        html="<h1>API Response Data</h1><p>JSON data file attached.</p>",
        subject="API Data Export",
        from_email=config.sender_email(),
        to=[Recipient(email=config.recipient_email())],
        attachments=[attachment_from_text("data.json", json.dumps(data, indent=2))],
        tags=["api", "json"],
    )


def build_kitchen_sink_message(config: AppConfig, attachment_dir: Optional[str] = None) -> MessageRequest:
    """One message exercising content, merge vars, attachments, tracking, tags and metadata."""
    directory = attachment_dir or default_attachment_dir(config)
    recipient = default_recipient(config)

    attachments: List[Attachment] = []
    pdf = attachment_from_file(os.path.join(directory, SAMPLE_PDF))
    if pdf is not None:
        attachments.append(pdf)

    message = MessageRequest(
        html=(
            "<h1>Hello {{fname}}!</h1>\n"
            "<p>This email demonstrates multiple Transactional API features.</p>\n"
            "<p><strong>Company:</strong> {{company_name}}</p>\n"
            "<p><strong>Account:</strong> {{account_id}}</p>\n"
            '<div style="width: 50px; height: 50px; background: #007bff; '
            'border: 2px solid #0056b3; display: inline-block;"></div>\n'
            "<p>This is a comprehensive demonstration of the Mandrill API capabilities in Python.</p>"
        ),
        text=(
            "Hello {{fname}}!\n\n"
            "This email demonstrates multiple Transactional API features.\n"
            "Company: {{company_name}}\n"
            "Account: {{account_id}}\n\n"
            "This is a comprehensive demonstration of the Mandrill API capabilities in Python."
        ),
        subject="Hello {{fname}} - Mandrill Features Demo",
        from_email=config.sender_email(),
        from_name=config.sender_name(),
        to=[recipient],
        headers=_reply_to(config, **{"X-Custom-Header": "Mandrill-Demo-Python", "X-Priority": "1"}),
        global_merge_vars=[MergeVar(name="company_name", content=DEFAULT_COMPANY_NAME)],
        merge_vars=[
            RecipientMergeVars(
                rcpt=recipient.email,
                vars=[
                    MergeVar(name="fname", content=DEFAULT_FIRST_NAME),
                    MergeVar(name="account_id", content=DEFAULT_ACCOUNT_ID),
                ],
            )
        ],
        merge_language="handlebars",
        attachments=attachments,
        images=[],
        track_opens=True,
        track_clicks=True,
        auto_text=True,
        auto_html=False,
        inline_css=True,
        url_strip_qs=False,
        preserve_recipients=False,
        view_content_link=True,
        tags=["demo", "kitchen-sink", "features", "python"],
        metadata={
            "campaign": "mandrill-demo",
            "version": "2.0",
            "language": "python",
            "environment": "development",
        },
        important=True,
    )
    message.ensure_sendable()
    return message


def scheduled_send_at(now: Optional[datetime] = None, delay: timedelta = timedelta(hours=1)) -> str:
    """UTC timestamp in the vendor's send_at format."""
    now = now or datetime.now(timezone.utc)
    return (now.astimezone(timezone.utc) + delay).strftime(SEND_AT_FORMAT)


def build_scheduled_message(
    config: AppConfig,
    now: Optional[datetime] = None,
    delay: timedelta = timedelta(hours=1),
) -> MessageRequest:
    recipient_email = config.recipient_email()
    return MessageRequest(
        html="<h1>Scheduled Email</h1><p>This was scheduled in advance, {{fname}}!</p>",
        text="Scheduled Email\n\nThis was scheduled in advance, {{fname}}!",
        subject="Scheduled: {{subject_line}}",
        from_email=config.sender_email(),
        from_name="Scheduled Sender",
        to=[Recipient(email=recipient_email)],
        global_merge_vars=[MergeVar(name="subject_line", content="Your Scheduled Message")],
        merge_vars=[
            RecipientMergeVars(rcpt=recipient_email, vars=[MergeVar(name="fname", content="Future Reader")])
        ],
        merge_language="handlebars",
        track_opens=True,
        track_clicks=True,
        tags=["scheduled", "kitchen-sink", "python"],
        send_at=scheduled_send_at(now, delay),
    )


def build_all_recipient_types_message(config: AppConfig) -> MessageRequest:
    return MessageRequest(
        html="<h1>Email with Multiple Recipient Types</h1><p>This demonstrates TO, CC, and BCC.</p>",
        subject="Multiple Recipient Types Demo",
        from_email=config.sender_email(),
        from_name="Demo Sender",
        to=[
            Recipient(email="primary@example.org", name="Primary Recipient", type="to"),
            Recipient(email="cc@example.org", name="CC Recipient", type="cc"),
            Recipient(email="bcc@example.org", name="BCC Recipient", type="bcc"),
        ],
        tags=["demo", "multiple-recipients"],
        preserve_recipients=True,
    )


def build_template_message(config: AppConfig, template_name: str) -> Tuple[List[TemplateContent], MessageRequest]:
    """
    Message and mc:edit content for a send-template call.

    Works for any stored template; names outside the catalogue get the
    generic welcome_message content.
    """
    template_content = template_edit_content(template_name)
    recipient = default_recipient(config)
    message = MessageRequest(
        from_email=config.sender_email(),
        from_name=config.sender_name(),
        subject="Welcome, {{fname}}",
        to=[recipient],
        global_merge_vars=[MergeVar(name="company_name", content=DEFAULT_COMPANY_NAME)],
        merge_vars=[
            RecipientMergeVars(
                rcpt=recipient.email,
                vars=[
                    MergeVar(name="fname", content=DEFAULT_FIRST_NAME),
                    MergeVar(name="account_id", content=DEFAULT_ACCOUNT_ID),
                ],
            )
        ],
        merge_language="handlebars",
        tags=["onboarding", "welcome"],
    )
    return template_content, message


def build_template_batch_message(config: AppConfig) -> Tuple[List[TemplateContent], MessageRequest]:
    people = [
        ("user1@example.org", "User One", "Alice", "ACC-101"),
        ("user2@example.org", "User Two", "Bob", "ACC-102"),
    ]
    message = MessageRequest(
        from_email=config.sender_email(),
        from_name="Welcome Team",
        subject="Welcome {{fname}} to {{company_name}}",
        to=[Recipient(email=email, name=name) for email, name, _, _ in people],
        global_merge_vars=[MergeVar(name="company_name", content=DEFAULT_COMPANY_NAME)],
        merge_vars=[
            RecipientMergeVars(
                rcpt=email,
                vars=[MergeVar(name="fname", content=fname), MergeVar(name="account_id", content=account_id)],
            )
            for email, _, fname, account_id in people
        ],
        merge_language="handlebars",
        track_opens=True,
        track_clicks=True,
        tags=["welcome", "batch-send"],
    )
    return [TemplateContent(name="welcome_message", content="<p>Your personalized welcome message!</p>")], message
