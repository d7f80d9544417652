"""Tests for the structured logging setup."""

import logging

from neumann_pkg.api import evaluate
from neumann_pkg.logging_config import StructuredFormatter, get_logger, setup_logging


def test_get_logger_is_namespaced():
    assert get_logger("engine").name == "neumann.engine"
    assert get_logger("engine").parent.name == "neumann"


def test_setup_logging_level_and_handlers(tmp_path):
    log_file = tmp_path / "neumann.log"
    logger = setup_logging(level="debug", log_file=str(log_file))
    try:
        assert logger.name == "neumann"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        get_logger("test").debug("written to file")
        for handler in logger.handlers:
            handler.flush()
        assert "written to file" in log_file.read_text()
    finally:
        for handler in logger.handlers:
            handler.close()
        setup_logging()


def test_setup_logging_replaces_handlers():
    setup_logging()
    logger = setup_logging(level="ERROR")
    assert len(logger.handlers) == 1
    assert logger.level == logging.ERROR
    setup_logging()


def test_unknown_level_falls_back_to_warning():
    assert setup_logging(level="chatty").level == logging.WARNING


def test_structured_formatter():
    record = logging.LogRecord(
        "neumann.test", logging.INFO, __file__, 1, "hello %s", ("world",), None
    )
    line = StructuredFormatter().format(record)
    assert line.endswith("[INFO] neumann.test: hello world")


def test_engine_logs_steps(caplog):
    caplog.set_level(logging.DEBUG, logger="neumann")
    evaluate("1+2")
    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("Applying +") for message in messages)


def test_failures_logged_at_info(caplog):
    caplog.set_level(logging.INFO, logger="neumann")
    evaluate("1/0")
    assert any(
        record.levelno == logging.INFO and record.name == "neumann.api"
        for record in caplog.records
    )


def test_structured_formatter_appends_context_fields():
    record = logging.LogRecord(
        "neumann.engine", logging.DEBUG, __file__, 1, "Handling %r", ("+",), None
    )
    record.position = 4
    record.code = None
    line = StructuredFormatter().format(record)
    assert line.endswith("[DEBUG] neumann.engine: Handling '+' position=4")


def test_numeric_level():
    assert setup_logging(level=logging.INFO).level == logging.INFO
    setup_logging()


def test_get_logger_accepts_qualified_names():
    assert get_logger("neumann.api") is get_logger("api")
    assert get_logger("neumann").name == "neumann"


def test_engine_records_carry_token_position(caplog):
    caplog.set_level(logging.DEBUG, logger="neumann")
    evaluate("10 / 4")
    applied = [r for r in caplog.records if r.getMessage().startswith("Applying /")]
    assert [r.position for r in applied] == [3]


def test_failure_record_carries_error_code(caplog):
    caplog.set_level(logging.INFO, logger="neumann")
    evaluate("(1+2]")
    failures = [r for r in caplog.records if r.name == "neumann.api"]
    assert failures[-1].code == "BRACKET_MISMATCH"
    assert failures[-1].position == 4
