"""Tests for store_rethinkdb.logging."""

import json

import pytest
import structlog
from structlog.testing import capture_logs

from store_rethinkdb.logging import LogContext, configure_logging, get_logger


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


class TestLogContext:
    def test_binds_and_unbinds(self):
        with LogContext(service="posts", table="posts"):
            bound = structlog.contextvars.get_contextvars()
            assert bound == {"service": "posts", "table": "posts"}
        assert structlog.contextvars.get_contextvars() == {}

    def test_unbinds_on_error(self):
        with pytest.raises(RuntimeError):
            with LogContext(service="posts"):
                raise RuntimeError("boom")
        assert "service" not in structlog.contextvars.get_contextvars()


class TestConfigureLogging:
    def test_json_output(self, capsys):
        configure_logging(level="INFO", json_format=True, service="posts")
        logger = get_logger("tests.logging")

        with LogContext(table="posts"):
            logger.info("rethinkdb_connected", host="localhost")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "rethinkdb_connected"
        assert record["host"] == "localhost"
        assert record["table"] == "posts"
        assert record["service.name"] == "posts"
        assert record["logger_name"] == "tests.logging"
        assert record["log.level"] == "info"
        assert "@timestamp" in record

    def test_level_filters_debug(self, capsys):
        configure_logging(level="INFO", json_format=True)
        get_logger("tests.logging").debug("hidden")
        assert "hidden" not in capsys.readouterr().out


class TestGetLogger:
    def test_named_logger_works_before_configuration(self, capsys):
        get_logger("tests.logging").info("unconfigured_event", table="posts")
        assert "unconfigured_event" in capsys.readouterr().out

    def test_module_logger_picks_up_later_configuration(self, capsys):
        logger = get_logger("tests.logging.late")
        configure_logging(level="INFO", json_format=True)
        logger.info("late_event")
        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["event"] == "late_event"
        assert record["logger_name"] == "tests.logging.late"

    def test_importing_adapter_module_binds_a_named_logger(self):
        from store_rethinkdb.adapters import rethinkdb as rethinkdb_module

        with capture_logs() as logs:
            rethinkdb_module.logger.info("imported")
        assert logs[0]["logger_name"] == "store_rethinkdb.adapters.rethinkdb"
