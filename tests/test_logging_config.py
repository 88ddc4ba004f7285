"""
Tests for structured logging configuration
"""

import json
import logging

from pool_ledger.logging_config import JSONFormatter, log_action, setup_logging


class TestJSONFormatter:
    """Test JSON log formatting"""

    def test_structured_fields(self):
        logger = logging.getLogger("test_pool_ledger.formatter")
        record = logger.makeRecord(logger.name, logging.WARNING, __name__, 0,
                                   "borrow rejected", (), None)
        record.user_id = 2
        record.action = "borrow"
        record.error_kind = "limit_exceeded"
        record.extra = {"amount": 100}

        entry = json.loads(JSONFormatter().format(record))

        assert entry["level"] == "WARNING"
        assert entry["logger"] == "test_pool_ledger.formatter"
        assert entry["message"] == "borrow rejected"
        assert entry["user_id"] == 2
        assert entry["action"] == "borrow"
        assert entry["error_kind"] == "limit_exceeded"
        assert entry["extra"] == {"amount": 100}
        assert "resource" not in entry


class TestSetupLogging:
    """Test logger setup and log_action"""

    def test_json_output(self, capsys):
        logger = setup_logging("INFO", logger_name="test_pool_ledger.json")

        log_action(logger, "info", "Deposit credited", user_id=1,
                   action="deposit", resource="user:1", extra={"amount": 5})

        entry = json.loads(capsys.readouterr().err.strip())
        assert entry["message"] == "Deposit credited"
        assert entry["resource"] == "user:1"
        assert entry["extra"] == {"amount": 5}

    def test_level_filters_actions(self, capsys):
        logger = setup_logging("WARNING", logger_name="test_pool_ledger.level")

        log_action(logger, "info", "hidden")
        log_action(logger, "warning", "shown")

        lines = capsys.readouterr().err.strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["message"] == "shown"

    def test_text_output_to_file(self, tmp_path):
        log_file = tmp_path / "ledger.log"
        logger = setup_logging("INFO", logger_name="test_pool_ledger.text",
                               log_format="text", log_file=str(log_file))

        logger.info("plain line")
        for handler in logger.handlers:
            handler.flush()

        assert "INFO test_pool_ledger.text: plain line" in log_file.read_text()

    def test_setup_replaces_handlers(self):
        setup_logging(logger_name="test_pool_ledger.handlers")
        logger = setup_logging(logger_name="test_pool_ledger.handlers")
        assert len(logger.handlers) == 1
        assert not logger.propagate
