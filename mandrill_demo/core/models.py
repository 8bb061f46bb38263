import json
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


MAX_MESSAGE_BYTES = 25 * 1024 * 1024


class InvalidMessageError(ValueError):
    """Raised when a message cannot be sent as built. No network call is made."""


class Recipient(BaseModel):
    email: str
    name: Optional[str] = None
    type: Literal["to", "cc", "bcc"] = "to"


class Attachment(BaseModel):
    type: str
    name: str
    content: str  # base64, no line breaks


class MergeVar(BaseModel):
    name: str
    content: Any


class RecipientMergeVars(BaseModel):
    rcpt: str
    vars: List[MergeVar] = []


class MessageRequest(BaseModel):
    html: Optional[str] = None
    text: Optional[str] = None
    subject: Optional[str] = None
    from_email: str
    from_name: Optional[str] = None
    to: List[Recipient] = []
    headers: Optional[Dict[str, str]] = None
    important: Optional[bool] = None
    track_opens: Optional[bool] = None
    track_clicks: Optional[bool] = None
    auto_text: Optional[bool] = None
    auto_html: Optional[bool] = None
    inline_css: Optional[bool] = None
    url_strip_qs: Optional[bool] = None
    preserve_recipients: Optional[bool] = None
    view_content_link: Optional[bool] = None
    tags: Optional[List[str]] = None
    metadata: Optional[Dict[str, str]] = None
    global_merge_vars: Optional[List[MergeVar]] = None
    merge_vars: Optional[List[RecipientMergeVars]] = None
    merge_language: Optional[Literal["handlebars", "mailchimp"]] = None
    attachments: Optional[List[Attachment]] = None
    images: Optional[List[Attachment]] = None
    # Sent as the top-level send_at parameter, not inside the message body.
    send_at: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Vendor message object. Unset fields are omitted."""
        return self.model_dump(exclude_none=True, exclude={"send_at"})

    def payload_size(self) -> int:
        return len(json.dumps(self.to_payload()).encode("utf-8"))

    def ensure_sendable(self) -> None:
        if not self.to:
            raise InvalidMessageError("Message must have at least one recipient")
        if not self.from_email:
            raise InvalidMessageError("Message must have a sender email")
        size = self.payload_size()
        if size > MAX_MESSAGE_BYTES:
            raise InvalidMessageError(
                f"Message size {size} bytes exceeds the {MAX_MESSAGE_BYTES} byte limit"
            )


class TemplateContent(BaseModel):
    name: str
    content: str


class TemplateDefinition(BaseModel):
    name: str
    from_email: Optional[str] = None
    from_name: Optional[str] = None
    subject: Optional[str] = None
    code: Optional[str] = None
    text: Optional[str] = None
    publish: bool = False
    labels: List[str] = []


class SendResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    status: str
    id: Optional[str] = Field(default=None, alias="_id")
    reject_reason: Optional[str] = None


class TemplateInfo(BaseModel):
    name: str
    slug: Optional[str] = None
    subject: Optional[str] = None
    from_email: Optional[str] = None
    from_name: Optional[str] = None
    labels: List[str] = []
    publish_name: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
