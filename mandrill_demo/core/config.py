import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


DEFAULT_BASE_URL = "https://mandrillapp.com/api/1.0"

# Used when the corresponding DEFAULT_* variable is unset.
PLACEHOLDER_FROM_EMAIL = "test@example.org"
PLACEHOLDER_FROM_NAME = "Test Sender"
PLACEHOLDER_TO_EMAIL = "recipient@example.org"
PLACEHOLDER_TO_NAME = "Test Recipient"


class AppConfig(BaseModel):
    mandrill_api_key: Optional[str] = None
    mandrill_base_url: str = DEFAULT_BASE_URL
    mandrill_timeout: float = 30.0
    default_from_email: Optional[str] = None
    default_from_name: Optional[str] = None
    default_to_email: Optional[str] = None
    default_to_name: Optional[str] = None
    attachment_dir: Optional[str] = None
    dispatch_timeout: Optional[float] = None

    def sender_email(self) -> str:
        return self.default_from_email or PLACEHOLDER_FROM_EMAIL

    def sender_name(self) -> str:
        return self.default_from_name or PLACEHOLDER_FROM_NAME

    def recipient_email(self) -> str:
        return self.default_to_email or PLACEHOLDER_TO_EMAIL

    def recipient_name(self) -> str:
        return self.default_to_name or PLACEHOLDER_TO_NAME


def load_env(path: Optional[str] = None) -> bool:
    """Load a .env file into the process environment without overriding set values."""
    return load_dotenv(dotenv_path=path, override=False)


def _float_or_none(raw: Optional[str]) -> Optional[float]:
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def load_config() -> AppConfig:
    timeout = _float_or_none(os.getenv("MANDRILL_TIMEOUT"))
    return AppConfig(
        mandrill_api_key=os.getenv("MANDRILL_API_KEY") or None,
        mandrill_base_url=os.getenv("MANDRILL_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        mandrill_timeout=timeout if timeout is not None else 30.0,
        default_from_email=os.getenv("DEFAULT_FROM_EMAIL") or None,
        default_from_name=os.getenv("DEFAULT_FROM_NAME") or None,
        default_to_email=os.getenv("DEFAULT_TO_EMAIL") or None,
        default_to_name=os.getenv("DEFAULT_TO_NAME") or None,
        attachment_dir=os.getenv("ATTACHMENT_DIR") or None,
        dispatch_timeout=_float_or_none(os.getenv("DISPATCH_TIMEOUT")),
    )
