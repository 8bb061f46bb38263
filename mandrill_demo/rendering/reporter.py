from html import escape
from typing import Any, Dict, List, Sequence, Union

from mandrill_demo.core.models import SendResult, TemplateInfo


RULE_WIDTH = 50

ResultLike = Union[SendResult, Dict[str, Any]]


def _as_result(item: ResultLike) -> SendResult:
    if isinstance(item, SendResult):
        return item
    return SendResult.model_validate(item)


def format_send_results(results: Sequence[ResultLike], title: str = "Email sent successfully!") -> List[str]:
    """
    Format per-recipient outcomes, one "<email>: <status>" line each.

    Args:
        results: Vendor results as SendResult models or raw dicts
        title: Heading line printed above the results

    Returns:
        Lines ready to print or join
    """
    lines = [title, "=" * RULE_WIDTH]
    if not results:
        lines.append(f"Unexpected result structure: {list(results)!r}")
    for item in results:
        result = _as_result(item)
        lines.append(f"{result.email}: {result.status}")
        if result.id:
            lines.append(f"  Message ID: {result.id}")
        if result.reject_reason:
            lines.append(f"  Reject Reason: {result.reject_reason}")
    lines.append("=" * RULE_WIDTH)
    return lines


def format_error(error: Exception, title: str = "Error sending email!") -> List[str]:
    message = getattr(error, "message", None) or str(error)
    return [title, "=" * RULE_WIDTH, f"Mandrill API Error: {message}", "=" * RULE_WIDTH]


def format_template_created(info: TemplateInfo) -> List[str]:
    lines = [
        "Template created successfully!",
        "=" * RULE_WIDTH,
        f"Name: {info.name}",
        f"Slug: {info.slug or 'N/A'}",
        f"Created at: {info.created_at or 'N/A'}",
    ]
    if info.publish_name:
        lines.append(f"Published as: {info.publish_name}")
    else:
        lines.append("Status: Draft (not published)")
    lines.append("=" * RULE_WIDTH)
    return lines


def format_template_list(templates: Sequence[TemplateInfo]) -> List[str]:
    lines = ["Your Mandrill Templates:", "=" * RULE_WIDTH, f"Total templates: {len(templates)}", ""]
    for template in templates:
        lines.append(f"  - {template.name}")
        lines.append(f"    Slug: {template.slug or 'N/A'}")
        if template.labels:
            lines.append(f"    Labels: {', '.join(template.labels)}")
        lines.append("")
    lines.append("=" * RULE_WIDTH)
    return lines


def format_template_info(info: TemplateInfo) -> List[str]:
    lines = [
        "Template Information:",
        "=" * RULE_WIDTH,
        f"Name: {info.name}",
        f"Subject: {info.subject or ''}",
        f"From: {info.from_name or ''} <{info.from_email or ''}>",
        f"Created: {info.created_at or 'N/A'}",
        f"Updated: {info.updated_at or 'N/A'}",
    ]
    if info.labels:
        lines.append(f"Labels: {', '.join(info.labels)}")
    lines.append("=" * RULE_WIDTH)
    return lines


def format_status_html(success: bool, message: str) -> str:
    """Status block shown above the demo form."""
    if success:
        return f"<div class='status-success'>✅ {escape(message)}</div>"
    return f"<div class='status-error'>❌ {escape(message)}</div>"
