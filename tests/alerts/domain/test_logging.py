"""Tests for logging configuration."""

import logging

import structlog
from alerts.utils.logging import configure_logging


class TestConfigureLogging:
    def setup_method(self):
        root = logging.getLogger()
        self._handlers = list(root.handlers)
        self._level = root.level
        self._protean_level = logging.getLogger("protean").level

    def teardown_method(self):
        root = logging.getLogger()
        root.handlers = self._handlers
        root.setLevel(self._level)
        logging.getLogger("protean").setLevel(self._protean_level)
        structlog.reset_defaults()

    def test_quiets_protean_logger(self):
        logging.getLogger("protean").setLevel(logging.DEBUG)
        configure_logging("INFO")
        assert logging.getLogger("protean").level == logging.WARNING

    def test_routes_through_stdlib(self):
        configure_logging("DEBUG", json_output=False)
        config = structlog.get_config()
        assert isinstance(config["logger_factory"], structlog.stdlib.LoggerFactory)
        assert config["wrapper_class"] is structlog.stdlib.BoundLogger
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        configure_logging("chatty")
        assert logging.getLogger().level == logging.INFO
