"""
Unit tests for prefixed loggers.
"""

import logging

import pytest

from cloudenv.config.settings import Settings
from cloudenv.utils.logging import LOG_FORMAT, PrefixedLogger, configure_logging, get_logger


@pytest.mark.unit
class TestGetLogger:

    def test_plain_logger_without_prefix(self):
        assert isinstance(get_logger("cloudenv.test"), logging.Logger)

    def test_prefix_added_to_messages(self, caplog):
        logger = get_logger("cloudenv.test", prefix="Store")

        with caplog.at_level(logging.INFO, logger="cloudenv.test"):
            logger.info("loaded")

        assert isinstance(logger, PrefixedLogger)
        assert caplog.records[-1].getMessage() == "[Store] loaded"


@pytest.mark.unit
class TestConfigureLogging:
    """configure_logging() hands a numeric level and the standard format to basicConfig."""

    @pytest.fixture
    def basic_config_calls(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        return calls

    @pytest.mark.parametrize("level, expected", [
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        (logging.ERROR, logging.ERROR),
        ("bogus", logging.INFO),
    ])
    def test_level_passed_to_basic_config(self, basic_config_calls, level, expected):
        configure_logging(level)

        assert basic_config_calls == [{"level": expected, "format": LOG_FORMAT}]

    def test_default_level_from_settings(self, basic_config_calls, monkeypatch):
        monkeypatch.setattr(
            "cloudenv.config.settings.get_settings",
            lambda: Settings(_env_file=None, LOG_LEVEL="error"),
        )

        configure_logging()

        assert basic_config_calls[0]["level"] == logging.ERROR
