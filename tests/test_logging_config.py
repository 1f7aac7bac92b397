"""Tests for semantic_chunking.logging_config."""

import logging

import pytest

from semantic_chunking.logging_config import ROOT_LOGGER, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


class TestSetupLogging:
    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging()
        logger = setup_logging(logging.DEBUG)
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "chunking.log"
        setup_logging(log_file=log_file)
        get_logger("cli").info("chunked 3 documents")
        for handler in logging.getLogger(ROOT_LOGGER).handlers:
            handler.flush()
        assert "chunked 3 documents" in log_file.read_text(encoding="utf-8")

    def test_get_logger_is_child_of_package_logger(self):
        assert get_logger("cli").name == "semantic_chunking.cli"
