import json
import logging

import pytest

from gemini_chat.infrastructure.logging import logger as logger_module
from gemini_chat.infrastructure.logging.logger import setup_logger
from gemini_chat.providers.gemini_client import GeminiClient


class SettingsStub:
    log_level = "INFO"
    log_dir = "unused"
    log_redact_content = False


class RedactingSettings(SettingsStub):
    log_redact_content = True


class ClientSettings:
    gemini_api_key = "test-key-1234567890"
    http_timeout = 1.0
    gemini_base_url = "https://example.test/v1beta"
    default_model = "chat"


@pytest.fixture
def file_logger(tmp_path, request):
    name = f"gemini_chat_test.{request.node.name}"
    log = setup_logger(name=name, log_dir=tmp_path)
    log.setLevel(logging.INFO)
    log.propagate = False
    yield log
    for h in list(log.handlers):
        log.removeHandler(h)
        h.close()


def read_lines(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]


def test_setup_is_idempotent(file_logger, tmp_path):
    again = setup_logger(name=file_logger.name, log_dir=tmp_path)
    assert again is file_logger
    assert len([h for h in again.handlers if isinstance(h, logging.FileHandler)]) == 1


def test_line_is_json_with_extra_merged(file_logger, tmp_path):
    file_logger.info("Completed dispatch", extra={"extra": {"trace_id": "t-1", "reply_chars": 12}})
    (line,) = read_lines(tmp_path / "chat.log")
    assert line["msg"] == "Completed dispatch"
    assert line["level"] == "INFO"
    assert line["name"] == file_logger.name
    assert line["trace_id"] == "t-1"
    assert line["reply_chars"] == 12
    assert line["ts"].endswith("Z")


def test_unserializable_extra_is_stringified(file_logger, tmp_path):
    class Opaque:
        def __str__(self):
            return "opaque-value"

    file_logger.info("odd payload", extra={"extra": {"obj": Opaque()}})
    (line,) = read_lines(tmp_path / "chat.log")
    assert line["obj"] == "opaque-value"


def test_exception_is_included(file_logger, tmp_path):
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        file_logger.exception("Subscriber failed")
    (line,) = read_lines(tmp_path / "chat.log")
    assert "RuntimeError: boom" in line["exc"]


def test_redaction_truncates_message(monkeypatch, file_logger, tmp_path):
    monkeypatch.setattr(logger_module, "settings", RedactingSettings())
    file_logger.info("x" * 200)
    (line,) = read_lines(tmp_path / "chat.log")
    assert line["msg"] == "x" * 64


def test_no_redaction_by_default(monkeypatch, file_logger, tmp_path):
    monkeypatch.setattr(logger_module, "settings", SettingsStub())
    file_logger.info("y" * 200)
    (line,) = read_lines(tmp_path / "chat.log")
    assert line["msg"] == "y" * 200


def test_client_logs_masked_key_only(caplog):
    caplog.set_level(logging.INFO, logger="gemini_chat")
    GeminiClient(ClientSettings())
    ready = [r for r in caplog.records if r.getMessage() == "Gemini client ready"]
    assert ready
    assert ready[-1].extra["api_key"] == "test..."
    formatter = logger_module.JsonFormatter()
    for record in caplog.records:
        assert "test-key-1234567890" not in formatter.format(record)
