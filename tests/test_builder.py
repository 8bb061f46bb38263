import base64
import json
from datetime import datetime, timezone

from mandrill_demo.core.config import AppConfig
from mandrill_demo.data.templates import GENERIC_EDIT_CONTENT
from mandrill_demo.messages.builder import (
    build_all_recipient_types_message,
    build_attachments_message,
    build_csv_report_message,
    build_json_data_message,
    build_kitchen_sink_message,
    build_merge_tags_message,
    build_multi_recipient_merge_message,
    build_scheduled_message,
    build_single_message,
    build_template_batch_message,
    build_template_message,
)


def _vars(entries):
    return {v.name: v.content for v in entries}


class TestDefaults:
    """Configured values win; documented placeholders fill the gaps."""

    def test_single_message_uses_placeholders(self):
        message = build_single_message(AppConfig())

        assert message.from_email == "test@example.org"
        assert message.from_name == "Test Sender"
        assert message.to[0].email == "recipient@example.org"
        assert message.to[0].name == "Test Recipient"
        assert message.headers == {"Reply-To": "test@example.org"}

    def test_single_message_uses_config(self):
        config = AppConfig(
            default_from_email="ops@acme.test",
            default_from_name="Acme Ops",
            default_to_email="ada@acme.test",
            default_to_name="Ada",
        )
        message = build_single_message(config)

        assert message.from_email == "ops@acme.test"
        assert message.from_name == "Acme Ops"
        assert message.to[0].email == "ada@acme.test"
        assert message.headers["Reply-To"] == "ops@acme.test"


class TestMergeTags:
    def test_no_overrides_gives_defaults(self):
        message = build_merge_tags_message(AppConfig())

        assert _vars(message.global_merge_vars) == {
            "company_name": "Intuit Developer Program",
            "membership_level": "Premium",
        }
        assert message.merge_vars[0].rcpt == "recipient@example.org"
        assert _vars(message.merge_vars[0].vars) == {"fname": "John", "lname": "Smith"}
        assert message.merge_language == "handlebars"

    def test_overrides_replace_only_given_fields(self):
        message = build_merge_tags_message(
            AppConfig(default_to_email="ada@acme.test"),
            first_name="Ada",
            company_name="Acme",
            membership_level="",
        )

        assert _vars(message.global_merge_vars) == {"company_name": "Acme", "membership_level": "Premium"}
        assert message.merge_vars[0].rcpt == "ada@acme.test"
        assert _vars(message.merge_vars[0].vars) == {"fname": "Ada", "lname": "Smith"}
        assert "{{fname}}" in message.subject

    def test_multiple_recipients_get_their_own_vars(self):
        message = build_multi_recipient_merge_message(AppConfig())

        assert [r.email for r in message.to] == ["john@example.org", "jane@example.org"]
        per_recipient = {mv.rcpt: _vars(mv.vars) for mv in message.merge_vars}
        assert per_recipient["john@example.org"] == {
            "fname": "John",
            "account_id": "ACC-001",
            "membership_level": "Premium",
        }
        assert per_recipient["jane@example.org"] == {
            "fname": "Jane",
            "account_id": "ACC-002",
            "membership_level": "Standard",
        }
        assert _vars(message.global_merge_vars) == {"company_name": "Intuit Developer Program"}


class TestAttachments:
    def test_missing_pdf_is_skipped(self, tmp_path):
        now = datetime(2030, 5, 1, 12, 0, tzinfo=timezone.utc)
        message = build_attachments_message(AppConfig(), attachment_dir=str(tmp_path), now=now)

        names = [a.name for a in message.attachments]
        assert names == ["readme.txt"]
        readme = base64.b64decode(message.attachments[0].content).decode("utf-8")
        assert "Generated at: 2030-05-01T12:00:00+00:00" in readme

    def test_pdf_is_attached_when_present(self, tmp_path):
        (tmp_path / "sample.pdf").write_bytes(b"%PDF-1.4 sample")

        message = build_attachments_message(AppConfig(), attachment_dir=str(tmp_path))

        pdf = message.attachments[0]
        assert pdf.name == "sample.pdf"
        assert pdf.type == "application/pdf"
        assert base64.b64decode(pdf.content) == b"%PDF-1.4 sample"

    def test_attachment_dir_from_config(self, tmp_path):
        (tmp_path / "sample.pdf").write_bytes(b"%PDF")

        message = build_kitchen_sink_message(AppConfig(attachment_dir=str(tmp_path)))

        assert [a.name for a in message.attachments] == ["sample.pdf"]

    def test_csv_report_attachment(self):
        message = build_csv_report_message(AppConfig(default_to_email="ada@acme.test"))

        attachment = message.attachments[0]
        assert attachment.name == "user_report.csv"
        assert attachment.type == "text/csv"
        rows = base64.b64decode(attachment.content).decode("utf-8").splitlines()
        assert rows[0] == "Name,Email,Status,Joined"
        assert len(rows) == 4
        assert message.to[0].email == "ada@acme.test"

    def test_json_data_attachment(self):
        now = datetime(2030, 5, 1, 12, 0, tzinfo=timezone.utc)
        message = build_json_data_message(AppConfig(), now=now)

        attachment = message.attachments[0]
        assert attachment.name == "data.json"
        assert attachment.type == "application/json"
        data = json.loads(base64.b64decode(attachment.content))
        assert data["total_users"] == 42
        assert data["timestamp"] == "2030-05-01T12:00:00+00:00"
        assert [u["name"] for u in data["users"]] == ["John", "Jane"]


def test_kitchen_sink_sets_tracking_and_metadata(tmp_path):
    message = build_kitchen_sink_message(AppConfig(), attachment_dir=str(tmp_path))
    payload = message.to_payload()

    assert payload["track_opens"] is True
    assert payload["track_clicks"] is True
    assert payload["important"] is True
    assert payload["auto_html"] is False
    assert payload["metadata"]["campaign"] == "mandrill-demo"
    assert payload["headers"]["X-Priority"] == "1"
    assert payload["attachments"] == []


def test_scheduled_message_is_one_hour_ahead_utc():
    now = datetime(2030, 1, 1, 23, 30, tzinfo=timezone.utc)
    message = build_scheduled_message(AppConfig(), now=now)

    assert message.send_at == "2030-01-02 00:30:00"
    assert "send_at" not in message.to_payload()


def test_all_recipient_types():
    message = build_all_recipient_types_message(AppConfig())
    assert [r.type for r in message.to] == ["to", "cc", "bcc"]
    assert message.preserve_recipients is True


class TestTemplateMessage:
    def test_hello_template_content(self):
        content, message = build_template_message(AppConfig(), "hello-template")

        assert content[0].name == "welcome_message"
        assert "Thanks for joining" in content[0].content
        assert message.tags == ["onboarding", "welcome"]
        assert message.html is None

    def test_invoice_template_content(self):
        content, _ = build_template_message(AppConfig(), "qbo-invoice-template")
        assert "test invoice email" in content[0].content

    def test_stored_template_outside_catalogue_gets_generic_content(self):
        content, message = build_template_message(AppConfig(), "newsletter")

        assert [c.name for c in content] == ["welcome_message"]
        assert content[0].content == GENERIC_EDIT_CONTENT
        assert message.to[0].email == "recipient@example.org"

    def test_batch_has_two_recipients_with_own_vars(self):
        content, message = build_template_batch_message(AppConfig())

        assert content[0].name == "welcome_message"
        assert [r.email for r in message.to] == ["user1@example.org", "user2@example.org"]
        per_recipient = {mv.rcpt: _vars(mv.vars) for mv in message.merge_vars}
        assert per_recipient == {
            "user1@example.org": {"fname": "Alice", "account_id": "ACC-101"},
            "user2@example.org": {"fname": "Bob", "account_id": "ACC-102"},
        }
        assert _vars(message.global_merge_vars) == {"company_name": "Intuit Developer Program"}
