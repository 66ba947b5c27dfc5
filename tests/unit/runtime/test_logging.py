"""Tests for loguru configuration."""

import logging

import pytest
from loguru import logger

from src.library.api.utils.app_startup import configure_logging
from src.library.runtime.config.config_data import ConfigData, LoggingConfig
from src.library.runtime.context import with_context


@pytest.fixture
def restore_logging():
    yield
    logger.complete()
    configure_logging()


@pytest.mark.usefixtures("restore_logging")
class TestConfigureLogging:
    def test_file_sink_receives_application_and_stdlib_logs(self, tmp_path):
        log_file = tmp_path / "logs" / "library.log"
        override = ConfigData(
            logging=LoggingConfig(level="INFO", format="plain", file=str(log_file))
        )

        with with_context(override):
            configure_logging()
            logger.info("catalog ready")
            logging.getLogger("some.library").warning("from stdlib")
            logger.complete()

        content = log_file.read_text()
        assert "catalog ready" in content
        assert "from stdlib" in content

    def test_uvicorn_access_records_dropped(self, tmp_path):
        log_file = tmp_path / "access.log"
        override = ConfigData(
            logging=LoggingConfig(level="DEBUG", format="plain", file=str(log_file))
        )

        with with_context(override):
            configure_logging()
            logging.getLogger("uvicorn.access").critical("GET /books 200")
            logger.complete()

        assert "GET /books 200" not in log_file.read_text()
