"""Tests for structlog setup."""

import json
import logging
from pathlib import Path

import pytest

from resumate.shared.logging import MAX_FIELD_CHARS, setup_logging


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_lines_written_to_file(tmp_path: Path, restore_root_logging):
    log_file = tmp_path / "logs" / "resumate.log"
    setup_logging(level="INFO", file_path=str(log_file))

    logging.getLogger("resumate.test").info("Profile saved for %s", "me")
    for handler in logging.getLogger().handlers:
        handler.flush()

    record = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
    assert record["event"] == "Profile saved for me"
    assert record["level"] == "info"
    assert record["logger"] == "resumate.test"


def test_client_libraries_quieted(restore_root_logging):
    setup_logging(level="INFO")
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("google_genai").level == logging.WARNING


def test_debug_keeps_client_libraries_verbose(restore_root_logging):
    setup_logging(level="debug")
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.DEBUG


def test_pasted_document_clipped(tmp_path: Path, restore_root_logging):
    log_file = tmp_path / "resumate.log"
    setup_logging(level="INFO", file_path=str(log_file))

    logging.getLogger("resumate.test").info("x" * (MAX_FIELD_CHARS + 500))
    for handler in logging.getLogger().handlers:
        handler.flush()

    record = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
    assert record["event"].startswith("x" * MAX_FIELD_CHARS)
    assert record["event"].endswith(f"[{MAX_FIELD_CHARS + 500} chars]")


def test_unusable_log_file_keeps_stdout(tmp_path: Path, restore_root_logging):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")
    setup_logging(level="INFO", file_path=str(blocker / "resumate.log"))

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)
