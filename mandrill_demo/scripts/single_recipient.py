"""
Send a single email to a single recipient.

Usage:
    python -m mandrill_demo.scripts.single_recipient [--advanced]
"""

import argparse
import sys

from mandrill_demo.messages.builder import build_advanced_message, build_single_message
from mandrill_demo.scripts.runner import EXIT_FAILED, emit, report_send, start


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Send a single email to a single recipient.")
    ap.add_argument("--advanced", action="store_true", help="Also enable tracking, tags and metadata")
    args = ap.parse_args(argv)

    started = start()
    if started is None:
        return EXIT_FAILED
    config, client = started

    if args.advanced:
        emit(["Sending email with advanced options..."])
        message = build_advanced_message(config)
        return report_send(
            lambda: client.send_message(message),
            "Advanced email sent successfully!",
            "Error sending advanced email!",
        )

    emit(["Sending basic email..."])
    message = build_single_message(config)
    return report_send(
        lambda: client.send_message(message),
        "Email sent successfully!",
        "Error sending email!",
    )


if __name__ == "__main__":
    sys.exit(main())
