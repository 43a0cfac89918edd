# pandora_client/log.py
from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "pandora_client"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def configure_logging(level: int | str = logging.INFO, log_file: Path | None = None) -> logging.Logger:
    """Attach console (and optional rotating file) handlers to the package logger once."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not logger.handlers:
        fmt = logging.Formatter(LOG_FORMAT)

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(fmt)
        logger.addHandler(stream_handler)

        if log_file is not None:
            try:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                file_handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5)
                file_handler.setFormatter(fmt)
                logger.addHandler(file_handler)
            except OSError as exc:
                logger.warning("Failed to initialize file logging at %s: %s", log_file, exc)

    logger.propagate = False
    return logger
