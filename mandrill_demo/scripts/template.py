"""
Send an email using a stored template, creating the template first if needed.

Usage:
    python -m mandrill_demo.scripts.template --template-name qbo-invoice-template [--batch]
"""

import argparse
import sys

from mandrill_demo.data.templates import DEFAULT_TEMPLATE
from mandrill_demo.messages.builder import build_template_batch_message, build_template_message
from mandrill_demo.scripts.runner import EXIT_FAILED, emit, report_send, start
from mandrill_demo.services.template_service import create_template


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Send an email with a stored template.")
    ap.add_argument("--template-name", default=DEFAULT_TEMPLATE, help="Stored template slug or built-in template name")
    ap.add_argument("--batch", action="store_true", help="Send the template to two recipients")
    args = ap.parse_args(argv)
    template_name = args.template_name or DEFAULT_TEMPLATE

    started = start()
    if started is None:
        return EXIT_FAILED
    config, client = started

    emit([f"Sending email with stored template: {template_name}", ""])
    created = create_template(client, config, template_name)
    if created.exists:
        emit([f"Template '{template_name}' already exists."])
    elif created.success:
        emit([f"Template '{template_name}' created successfully!"])
    else:
        emit([f"Error creating template: {created.error}", f"Failed to ensure template '{template_name}' exists."])
        return EXIT_FAILED

    if args.batch:
        template_content, message = build_template_batch_message(config)
        title = "Batch template emails sent!"
    else:
        template_content, message = build_template_message(config, template_name)
        title = "Template-based email sent successfully!"
    return report_send(
        lambda: client.send_template(template_name, template_content, message),
        title,
        "Error sending template-based email!",
    )


if __name__ == "__main__":
    sys.exit(main())
