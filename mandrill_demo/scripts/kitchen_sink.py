"""
Send one message exercising every supported option.

Usage:
    python -m mandrill_demo.scripts.kitchen_sink [--scheduled] [--all-recipient-types]
"""

import argparse
import sys

from mandrill_demo.core.models import InvalidMessageError
from mandrill_demo.messages.builder import (
    build_all_recipient_types_message,
    build_kitchen_sink_message,
    build_scheduled_message,
)
from mandrill_demo.rendering.reporter import format_error
from mandrill_demo.scripts.runner import EXIT_FAILED, emit, report_send, start


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Send an email with all supported features.")
    ap.add_argument("--attachment-dir", default=None)
    ap.add_argument("--scheduled", action="store_true", help="Schedule delivery one hour from now")
    ap.add_argument("--all-recipient-types", action="store_true", help="Send to to, cc and bcc recipients")
    args = ap.parse_args(argv)

    started = start()
    if started is None:
        return EXIT_FAILED
    config, client = started

    if args.scheduled:
        message = build_scheduled_message(config)
        emit(["Scheduling kitchen sink email...", f"Scheduled for: {message.send_at} UTC", ""])
        return report_send(
            lambda: client.send_message(message),
            "Email scheduled successfully!",
            "Error scheduling email!",
        )

    if args.all_recipient_types:
        message = build_all_recipient_types_message(config)
        return report_send(
            lambda: client.send_message(message),
            "Email with multiple recipient types sent!",
            "Error sending email!",
        )

    emit(["Sending comprehensive kitchen sink email...", ""])
    try:
        message = build_kitchen_sink_message(config, attachment_dir=args.attachment_dir)
    except InvalidMessageError as exc:
        emit(format_error(exc, "Error sending kitchen sink email!"))
        return EXIT_FAILED
    return report_send(
        lambda: client.send_message(message),
        "Kitchen Sink email sent successfully!",
        "Error sending kitchen sink email!",
    )


if __name__ == "__main__":
    sys.exit(main())
