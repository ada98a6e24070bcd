from __future__ import annotations

import logging
from io import StringIO

from teamtrack.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    reset_logging,
    setup_logging,
)


def test_setup_logging_attaches_one_labeled_handler():
    logger = setup_logging()
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    a = setup_logging()
    b = setup_logging()
    assert a is b
    assert len(b.handlers) == 1


def test_setup_logging_debug_upgrades_level():
    setup_logging()
    assert setup_logging(debug=True).level == logging.DEBUG


def test_reset_logging_detaches_handler():
    logger = setup_logging()
    reset_logging()
    assert logger.handlers == []
    assert len(setup_logging().handlers) == 1


def test_labeled_prefixes():
    out = StringIO()
    logger = logging.getLogger("teamtrack_test_labels")
    for h in logger.handlers[:]:
        logger.removeHandler(h)
    handler = logging.StreamHandler(out)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    logger.debug("d")
    logger.info("i")
    logger.warning("w")
    logger.error("e")
    logger.log(SUMMARY_LEVEL, "s")

    assert out.getvalue().splitlines() == ["DEBUG d", "INFO i", "WARN w", "ERROR e", "SUMMARY s"]


def test_module_loggers_reach_stdout(capsys):
    setup_logging()
    logging.getLogger("teamtrack.services.import_pipeline").info("from module")
    logging.getLogger("teamtrack.services.import_pipeline").debug("hidden")
    out = capsys.readouterr().out
    assert "INFO from module" in out
    assert "hidden" not in out
