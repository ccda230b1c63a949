import logging

import pytest
import structlog

from quickmedian import logging_config


@pytest.fixture
def fresh_logging(monkeypatch):
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    monkeypatch.setattr(logging_config, "_CONFIGURED", False)
    yield
    root_logger.handlers = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


def test_resolve_level(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    assert logging_config._resolve_level(None) == logging.INFO
    assert logging_config._resolve_level("debug") == logging.DEBUG
    assert logging_config._resolve_level("not-a-level") == logging.INFO
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    assert logging_config._resolve_level(None) == logging.ERROR


def test_resolve_format(monkeypatch):
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    assert logging_config._resolve_format(None) == "keyvalue"
    assert logging_config._resolve_format(" JSON ") == "json"
    assert logging_config._resolve_format("xml") == "keyvalue"
    monkeypatch.setenv("LOG_FORMAT", "console")
    assert logging_config._resolve_format(None) == "console"


def test_configure_logging_warning_level_uses_stderr_only(fresh_logging):
    logging_config.configure_logging(level="WARNING", fmt="json")
    root_logger = logging.getLogger()
    assert root_logger.level == logging.WARNING
    assert len(root_logger.handlers) == 1
    assert root_logger.handlers[0].level == logging.WARNING
    assert logging_config.is_configured()


def test_configure_logging_is_idempotent(fresh_logging):
    logging_config.configure_logging(level="INFO")
    handlers = list(logging.getLogger().handlers)
    assert len(handlers) == 2
    logging_config.configure_logging(level="DEBUG")
    assert logging.getLogger().handlers == handlers
    assert logging.getLogger().level == logging.INFO


def test_get_logger_configures_on_first_use(fresh_logging):
    logger = logging_config.get_logger("quickmedian.test")
    assert logging_config.is_configured()
    logger.info("logger_ready", component="test")
