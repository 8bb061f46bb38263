"""
Create the demo templates in the Mandrill account and list what is stored.

Usage:
    python -m mandrill_demo.scripts.create_template [--name hello-template ...] [--list]
    python -m mandrill_demo.scripts.create_template --info hello-template
    python -m mandrill_demo.scripts.create_template --delete hello-template
"""

import argparse
import sys

from mandrill_demo.data.templates import TEMPLATES
from mandrill_demo.rendering.reporter import (
    format_error,
    format_template_created,
    format_template_info,
    format_template_list,
)
from mandrill_demo.scripts.runner import EXIT_FAILED, EXIT_OK, emit, start
from mandrill_demo.services.mandrill_client import MandrillApiError
from mandrill_demo.services.template_service import create_template


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Create email templates.")
    ap.add_argument("--name", action="append", default=None, help="Template to create (repeatable); defaults to all")
    ap.add_argument("--list", action="store_true", help="Only list stored templates")
    ap.add_argument("--info", metavar="NAME", default=None, help="Show one stored template")
    ap.add_argument("--delete", metavar="NAME", default=None, help="Delete one stored template")
    args = ap.parse_args(argv)

    started = start()
    if started is None:
        return EXIT_FAILED
    config, client = started

    if args.info:
        try:
            emit(format_template_info(client.template_info(args.info)))
        except MandrillApiError as exc:
            emit(format_error(exc, "Error getting template info!"))
            return EXIT_FAILED
        return EXIT_OK

    if args.delete:
        try:
            client.delete_template(args.delete)
        except MandrillApiError as exc:
            emit(format_error(exc, "Error deleting template!"))
            return EXIT_FAILED
        emit([f"Template deleted: {args.delete}"])
        return EXIT_OK

    exit_code = EXIT_OK
    if not args.list:
        emit(["Creating email templates...", ""])
        for name in args.name or list(TEMPLATES):
            emit([f"Creating {name}..."])
            result = create_template(client, config, name)
            if result.exists:
                emit([f"Template '{name}' already exists."])
            elif result.success and result.info is not None:
                emit(format_template_created(result.info))
            else:
                emit([f"Error creating template: {result.error}"])
                exit_code = EXIT_FAILED
            emit([""])

    emit(["Listing all templates...", ""])
    try:
        emit(format_template_list(client.list_templates()))
    except MandrillApiError as exc:
        emit(format_error(exc, "Error listing templates!"))
        return EXIT_FAILED
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
