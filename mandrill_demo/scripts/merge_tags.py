"""
Send a personalised email using handlebars merge tags.

Usage:
    python -m mandrill_demo.scripts.merge_tags --first-name Ada --company-name Acme
    python -m mandrill_demo.scripts.merge_tags --multiple
"""

import argparse
import sys

from mandrill_demo.messages.builder import build_merge_tags_message, build_multi_recipient_merge_message
from mandrill_demo.scripts.runner import EXIT_FAILED, emit, report_send, start


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Send an email with merge tags.")
    ap.add_argument("--first-name", default=None)
    ap.add_argument("--last-name", default=None)
    ap.add_argument("--company-name", default=None)
    ap.add_argument("--membership-level", default=None)
    ap.add_argument("--multiple", action="store_true", help="Send to two recipients with their own merge data")
    args = ap.parse_args(argv)

    started = start()
    if started is None:
        return EXIT_FAILED
    config, client = started

    if args.multiple:
        emit(["Sending to multiple recipients...", ""])
        message = build_multi_recipient_merge_message(config)
        return report_send(
            lambda: client.send_message(message),
            "Batch personalized emails sent!",
            "Error sending personalized emails!",
        )

    emit(["Sending personalized email with merge tags...", ""])
    message = build_merge_tags_message(
        config,
        first_name=args.first_name,
        last_name=args.last_name,
        company_name=args.company_name,
        membership_level=args.membership_level,
    )
    return report_send(
        lambda: client.send_message(message),
        "Personalized email sent successfully!",
        "Error sending personalized email!",
    )


if __name__ == "__main__":
    sys.exit(main())
