from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from pandora_client.log import LOGGER_NAME, configure_logging


@pytest.fixture
def pkg_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    logger.handlers.clear()
    yield logger
    for h in logger.handlers:
        h.close()
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_configure_logging_is_idempotent(pkg_logger, tmp_path):
    log_file = tmp_path / "logs" / "pandora.log"
    configure_logging("DEBUG", log_file)
    configure_logging("DEBUG", log_file)
    assert len(pkg_logger.handlers) == 2
    assert any(isinstance(h, RotatingFileHandler) for h in pkg_logger.handlers)
    assert pkg_logger.level == logging.DEBUG
    assert pkg_logger.propagate is False

    logging.getLogger(f"{LOGGER_NAME}.points").info("hello")
    for h in pkg_logger.handlers:
        h.flush()
    assert "INFO pandora_client.points - hello" in log_file.read_text()


def test_configure_logging_console_only(pkg_logger):
    configure_logging()
    assert [type(h) for h in pkg_logger.handlers] == [logging.StreamHandler]
