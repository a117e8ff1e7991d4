"""Tests for log mode switching."""
import logging

import pytest

from auto_translatr.logger import configure_logging, get_logger


def test_modes_update_existing_loggers():
    logger = get_logger("auto_translatr.tests.modes")

    configure_logging("debug")
    assert logger.level == logging.DEBUG

    configure_logging("off")
    assert not logger.isEnabledFor(logging.WARNING)
    assert logger.isEnabledFor(logging.ERROR)

    configure_logging("info")
    assert logger.level == logging.INFO


def test_log_file(tmp_path):
    log_file = tmp_path / "logs" / "auto-translatr.log"
    logger = get_logger("auto_translatr.tests.file")

    configure_logging("info", log_file=log_file)
    logger.info("written to file")
    configure_logging("info")

    assert "written to file" in log_file.read_text(encoding="utf-8")
    assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)


def test_unknown_mode():
    with pytest.raises(ValueError):
        configure_logging("verbose")


def test_off_mode_keeps_errors(caplog):
    logger = get_logger("auto_translatr.tests.off")
    configure_logging("off")

    logger.info("progress line")
    logger.error("Failed to add missing translations: disk error")

    assert "progress line" not in caplog.text
    assert "Failed to add missing translations: disk error" in caplog.text
