"""
Send an email with file attachments.

Usage:
    python -m mandrill_demo.scripts.attachments [--attachment-dir DIR] [--csv] [--json]
"""

import argparse
import sys

from mandrill_demo.core.models import InvalidMessageError
from mandrill_demo.messages.builder import (
    build_attachments_message,
    build_csv_report_message,
    build_json_data_message,
)
from mandrill_demo.rendering.reporter import format_error
from mandrill_demo.scripts.runner import EXIT_FAILED, emit, report_send, start


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Send an email with attachments.")
    ap.add_argument("--attachment-dir", default=None, help="Directory holding sample.pdf")
    ap.add_argument("--csv", action="store_true", help="Send a generated CSV report instead")
    ap.add_argument("--json", action="store_true", help="Send a generated JSON export instead")
    args = ap.parse_args(argv)

    started = start()
    if started is None:
        return EXIT_FAILED
    config, client = started

    if args.csv:
        message = build_csv_report_message(config)
        return report_send(
            lambda: client.send_message(message),
            "CSV report email sent successfully!",
            "Error sending CSV report!",
        )
    if args.json:
        message = build_json_data_message(config)
        return report_send(
            lambda: client.send_message(message),
            "JSON attachment email sent successfully!",
            "Error sending JSON attachment!",
        )

    emit(["Sending email with attachments..."])
    try:
        message = build_attachments_message(config, attachment_dir=args.attachment_dir)
    except InvalidMessageError as exc:
        emit(format_error(exc, "Error sending email with attachments!"))
        return EXIT_FAILED
    names = ", ".join(a.name for a in message.attachments or [])
    emit([f"Number of attachments: {len(message.attachments or [])} ({names})", ""])
    return report_send(
        lambda: client.send_message(message),
        "Email with attachments sent successfully!",
        "Error sending email with attachments!",
    )


if __name__ == "__main__":
    sys.exit(main())
