"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from fzbarber.config import BaseConfig
from fzbarber.devtools import dev_log, format_dev_line
from fzbarber.logging_config import (
    JSONFormatter,
    SessionBufferHandler,
    get_logger,
    session_log_path,
    setup_logging,
)


def _record(msg="Test message", level=logging.INFO, exc_info=None, **extra):
    record = logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    record.module = "test_module"
    record.funcName = "test_function"
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter():
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_carries_extra_fields():
    log_data = json.loads(JSONFormatter().format(_record(record_id=7, outcome="forbidden")))
    assert log_data["extra"] == {"record_id": 7, "outcome": "forbidden"}


def test_json_formatter_with_exception():
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(JSONFormatter().format(_record("Error occurred", logging.ERROR, exc_info)))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"]


@pytest.fixture
def logging_config(app_env):
    config = BaseConfig()
    yield config
    logger = logging.getLogger("fzbarber")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_log_level_follows_config(logging_config):
    logging_config.LOG_LEVEL = "DEBUG"
    assert setup_logging(logging_config).level == logging.DEBUG


def test_setup_logging(logging_config):
    logger = setup_logging(logging_config)

    assert logger.name == "fzbarber"
    assert logger.level == logging.INFO
    kinds = [type(h) for h in logger.handlers]
    assert logging.handlers.RotatingFileHandler in kinds
    assert SessionBufferHandler in kinds
    assert len(logger.handlers) == 3

    log_file = logging_config.DATA_DIR / "logs" / "fzbarber.log"
    assert log_file.exists()

    get_logger("services.earnings").warning("Window computed", extra={"windows": 4})
    for handler in logger.handlers:
        handler.flush()

    lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    assert any(entry["message"] == "Logging initialized" for entry in lines)
    warning = next(entry for entry in lines if entry["message"] == "Window computed")
    assert warning["logger"] == "fzbarber.services.earnings"
    assert warning["extra"] == {"windows": 4}

    path = session_log_path()
    assert path is not None
    assert path.parent == logging_config.DATA_DIR / "logs"


def test_setup_logging_is_repeatable(logging_config):
    setup_logging(logging_config)
    logger = setup_logging(logging_config)
    assert len(logger.handlers) == 3


@pytest.mark.parametrize("dev_mode", [True, False])
def test_console_level_by_mode(logging_config, dev_mode):
    logging_config.DEV_MODE = dev_mode
    logger = setup_logging(logging_config)

    console = [
        h
        for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(console) == 1
    assert console[0].level == (logging.INFO if dev_mode else logging.WARNING)


def test_get_logger_namespacing():
    assert get_logger("module1").name == "fzbarber.module1"
    assert get_logger("fzbarber.infra.repositories.service_record").name == (
        "fzbarber.infra.repositories.service_record"
    )
    assert get_logger("fzbarber").name == "fzbarber"


def test_dev_log_only_prints_in_dev_mode(app_env, capsys):
    config = BaseConfig()
    dev_log(config, "Route load failed", context={"route": "/dashboard"})
    assert capsys.readouterr().out.strip() == "[DEV] Route load failed (route=/dashboard)"

    config.DEV_MODE = False
    dev_log(config, "hidden")
    assert capsys.readouterr().out == ""
    dev_log(None, "hidden")
    assert capsys.readouterr().out == ""


def test_dev_log_prints_traceback(app_env, capsys):
    try:
        raise RuntimeError("boom")
    except RuntimeError as exc:
        dev_log(BaseConfig(), "Failed", exc=exc)
    out = capsys.readouterr().out
    assert "[DEV] Failed" in out
    assert "RuntimeError: boom" in out


def test_format_dev_line_without_context():
    assert format_dev_line("hello") == "[DEV] hello"
    assert format_dev_line("hello", {}) == "[DEV] hello"
