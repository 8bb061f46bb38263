import base64
import json
import logging

from mandrill_demo.messages.attachments import (
    DEFAULT_MIME_TYPE,
    attachment_from_file,
    attachment_from_text,
    get_mime_type,
    read_file_as_base64,
)


def test_base64_round_trip_reproduces_file_bytes(tmp_path):
    data = bytes(range(256)) * 4 + b"\x00\r\n%PDF-1.4"
    path = tmp_path / "blob.bin"
    path.write_bytes(data)

    encoded = read_file_as_base64(str(path))

    assert "\n" not in encoded
    assert base64.b64decode(encoded) == data


def test_missing_file_returns_none(tmp_path):
    assert read_file_as_base64(str(tmp_path / "nope.pdf")) is None
    assert attachment_from_file(str(tmp_path / "nope.pdf")) is None


def test_missing_file_logs_warning(tmp_path, caplog):
    path = str(tmp_path / "nope.pdf")
    with caplog.at_level(logging.WARNING, logger="mandrill_demo"):
        read_file_as_base64(path)

    entry = json.loads(caplog.records[-1].getMessage())
    assert entry["level"] == "WARNING"
    assert entry["path"] == path
    assert "not found" in entry["message"]


def test_attachment_from_file_sets_type_and_name(tmp_path):
    path = tmp_path / "Report.PDF"
    path.write_bytes(b"%PDF-1.4 demo")

    attachment = attachment_from_file(str(path))

    assert attachment.name == "Report.PDF"
    assert attachment.type == "application/pdf"
    assert base64.b64decode(attachment.content) == b"%PDF-1.4 demo"


def test_mime_types():
    assert get_mime_type("a.docx") == "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    assert get_mime_type("photo.JPG") == "image/jpeg"
    assert get_mime_type("data.csv") == "text/csv"
    assert get_mime_type("archive.tar.gz") == DEFAULT_MIME_TYPE
    assert get_mime_type("README") == DEFAULT_MIME_TYPE


def test_text_attachment_is_utf8():
    attachment = attachment_from_text("notes.txt", "café")
    assert attachment.type == "text/plain"
    assert base64.b64decode(attachment.content).decode("utf-8") == "café"
