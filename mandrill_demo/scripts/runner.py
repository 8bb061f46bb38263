"""Shared start-up and reporting for the demo scripts."""

from typing import Callable, List, Optional, Tuple

from mandrill_demo.core.config import AppConfig, load_config, load_env
from mandrill_demo.core.models import InvalidMessageError, SendResult
from mandrill_demo.observability.logger import configure_script_logging
from mandrill_demo.rendering.reporter import format_error, format_send_results
from mandrill_demo.services.mandrill_client import MandrillApiError, MandrillClient, MissingApiKeyError, create_client


EXIT_OK = 0
EXIT_FAILED = 1


def emit(lines: List[str]) -> None:
    for line in lines:
        print(line)


def start() -> Optional[Tuple[AppConfig, MandrillClient]]:
    """
    Load .env and config and build the client.

    Returns None after printing the reason when no API key is configured.
    """
    configure_script_logging()
    load_env()
    config = load_config()
    try:
        client = create_client(config)
    except MissingApiKeyError as exc:
        emit([f"Error: {exc}", "Please create a .env file with your Mandrill API key."])
        return None
    return config, client


def report_send(
    call: Callable[[], List[SendResult]],
    title: str,
    error_title: str,
) -> int:
    """Run one vendor call and print its outcome. Returns the process exit code."""
    try:
        results = call()
    except (MandrillApiError, InvalidMessageError) as exc:
        emit(format_error(exc, error_title))
        return EXIT_FAILED
    emit(format_send_results(results, title))
    return EXIT_OK
