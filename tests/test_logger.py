"""Tests for vulkan.logger module."""

import json
import logging
import os
from unittest import mock

import pytest

from vulkan.logger import (
    JsonFormatter,
    Logger,
    StructuredLogger,
    TextFormatter,
    create_logger,
    get_logger,
)


def _read_lines(path):
    with open(path, encoding="utf-8") as fh:
        return [line for line in fh.read().splitlines() if line]


class TestLoggerInterface:
    """Tests for the Logger abstract interface."""

    def test_logger_is_abstract(self):
        with pytest.raises(TypeError):
            Logger()  # type: ignore

    def test_logger_has_required_methods(self):
        for method in ("debug", "info", "warning", "error", "critical", "get_session_id"):
            assert hasattr(Logger, method)


class TestStructuredLogger:
    """Tests for StructuredLogger."""

    def test_session_id(self):
        logger = StructuredLogger(name="vulkan-test-session")

        assert len(logger.get_session_id()) == 8
        assert logger.name == "vulkan-test-session"

    def test_json_output_to_file(self, tmp_path):
        log_file = tmp_path / "vulkan.log"
        logger = StructuredLogger(
            name="vulkan-test-json", log_file=str(log_file), json_format=True
        )

        logger.info("Backup pushed", trigger="POST /well", branch="master")

        [line] = _read_lines(log_file)
        record = json.loads(line)
        assert record["message"] == "Backup pushed"
        assert record["level"] == "INFO"
        assert record["logger"] == "vulkan-test-json"
        assert record["trigger"] == "POST /well"
        assert record["branch"] == "master"
        assert record["session_id"] == logger.get_session_id()

    def test_reserved_keys_are_prefixed(self, tmp_path):
        log_file = tmp_path / "vulkan.log"
        logger = StructuredLogger(
            name="vulkan-test-reserved", log_file=str(log_file), json_format=True
        )

        logger.info("Copied file", filename="data.csv", name="x")

        record = json.loads(_read_lines(log_file)[0])
        assert record["_filename"] == "data.csv"
        assert record["_name"] == "x"
        assert record["logger"] == "vulkan-test-reserved"

    def test_exc_info_attaches_traceback(self, tmp_path):
        log_file = tmp_path / "vulkan.log"
        logger = StructuredLogger(
            name="vulkan-test-exc", log_file=str(log_file), json_format=True
        )

        try:
            raise RuntimeError("disk full")
        except RuntimeError:
            logger.error("Backup failed", exc_info=True)

        record = json.loads(_read_lines(log_file)[0])
        assert "RuntimeError: disk full" in record["exception"]

    def test_text_output_appends_fields(self, tmp_path):
        log_file = tmp_path / "vulkan.log"
        logger = StructuredLogger(name="vulkan-test-text", log_file=str(log_file))

        logger.warning("Source directory missing", source_dir="/data")

        [line] = _read_lines(log_file)
        assert "[WARNING]" in line
        assert f"[session:{logger.get_session_id()}]" in line
        assert line.endswith("Source directory missing source_dir=/data")

    def test_level_filters_messages(self, tmp_path):
        log_file = tmp_path / "vulkan.log"
        logger = StructuredLogger(
            name="vulkan-test-level", level=logging.WARNING, log_file=str(log_file)
        )

        logger.debug("hidden")
        logger.info("hidden")
        logger.error("shown")

        lines = _read_lines(log_file)
        assert len(lines) == 1
        assert "shown" in lines[0]

    def test_reinit_does_not_duplicate_handlers(self):
        StructuredLogger(name="vulkan-test-handlers")
        StructuredLogger(name="vulkan-test-handlers")

        assert len(logging.getLogger("vulkan-test-handlers").handlers) == 1

    def test_unwritable_log_file_falls_back_to_console(self, tmp_path, capsys):
        logger = StructuredLogger(
            name="vulkan-test-badfile", log_file=str(tmp_path / "missing" / "x.log")
        )

        logger.info("still works")

        assert "Failed to setup log file" in capsys.readouterr().err


class TestFormatters:
    def test_json_formatter_plain_record(self):
        record = logging.LogRecord("vulkan", logging.INFO, __file__, 1, "hello %s", ("world",), None)

        data = json.loads(JsonFormatter().format(record))

        assert data["message"] == "hello world"
        assert "session_id" not in data

    def test_text_formatter_without_fields(self):
        record = logging.LogRecord("vulkan", logging.INFO, __file__, 1, "plain", (), None)

        assert TextFormatter("%(message)s").format(record) == "plain"


class TestFactories:
    def test_create_logger_reads_environment(self, tmp_path):
        log_file = tmp_path / "env.log"
        env = {
            "VULKAN_ENVTEST_LOG_LEVEL": "ERROR",
            "VULKAN_ENVTEST_LOG_FILE": str(log_file),
            "VULKAN_ENVTEST_LOG_JSON": "true",
        }
        with mock.patch.dict(os.environ, env):
            logger = create_logger(name="vulkan-envtest")

        logger.info("filtered")
        logger.error("kept", code="X")

        [line] = _read_lines(log_file)
        assert json.loads(line)["code"] == "X"

    def test_explicit_arguments_win_over_environment(self):
        with mock.patch.dict(os.environ, {"VULKAN_ARGS_LOG_LEVEL": "ERROR"}):
            logger = create_logger(name="vulkan-args", level=logging.DEBUG)

        assert isinstance(logger, StructuredLogger)
        assert logging.getLogger("vulkan-args").level == logging.DEBUG

    def test_get_logger_default_name(self):
        logger = get_logger()

        assert isinstance(logger, StructuredLogger)
        assert logger.name == "vulkan"
