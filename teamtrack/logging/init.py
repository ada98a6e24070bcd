from __future__ import annotations

import logging
import sys

"""Console logging for the CLI.

All package loggers hang under ``teamtrack`` and share one stdout handler.
Lines read "<LABEL> <message>"; SUMMARY (25) sits between INFO and WARN and
carries the one-line import summary.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "reset_logging",
    "setup_logging",
]

LOGGER_NAME = "teamtrack"
SUMMARY_LEVEL = 25

_handler: logging.Handler | None = None


class LabeledFormatter(logging.Formatter):
    LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        SUMMARY_LEVEL: "SUMMARY",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
    }

    def format(self, record: logging.LogRecord) -> str:
        return f"{self.LABELS.get(record.levelno, record.levelname)} {record.getMessage()}"


def setup_logging(debug: bool = False) -> logging.Logger:
    """Attach the stdout handler once; later calls only adjust the level."""
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if debug else logging.INFO
    if _handler is None:
        logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(LabeledFormatter())
        logger.addHandler(_handler)
        logger.propagate = False
        logger.setLevel(level)
    elif debug:
        logger.setLevel(level)
    return logger


def reset_logging() -> None:
    """Detach the handler so the next setup binds to the current sys.stdout."""
    global _handler
    if _handler is not None:
        logging.getLogger(LOGGER_NAME).removeHandler(_handler)
        _handler = None
