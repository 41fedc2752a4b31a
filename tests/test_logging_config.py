"""Tests for process-wide logging setup."""

import logging

import pytest

from src.logging_config import LOG_FILE_NAME, reset_logging, setup_logging


@pytest.fixture
def root_logger():
    """Root logger; its level is restored and our handlers closed afterwards."""
    root = logging.getLogger()
    saved_level = root.level
    yield root
    reset_logging()
    root.setLevel(saved_level)


def _detach_handlers(root):
    # pytest attaches its capture handlers to the root logger for each test
    for handler in list(root.handlers):
        root.removeHandler(handler)


class TestSetupLogging:
    def test_creates_log_file(self, root_logger, tmp_path):
        _detach_handlers(root_logger)
        log_file = setup_logging(log_dir=tmp_path / "logs")
        assert log_file == tmp_path / "logs" / LOG_FILE_NAME
        logging.getLogger("src.season_engine.test").debug("per-queen detail")
        for handler in root_logger.handlers:
            handler.flush()
        assert "per-queen detail" in log_file.read_text()

    def test_console_follows_level(self, root_logger, tmp_path):
        _detach_handlers(root_logger)
        setup_logging("warning", log_dir=tmp_path)
        levels = {type(h).__name__: h.level for h in root_logger.handlers}
        assert levels["StreamHandler"] == logging.WARNING
        assert levels["RotatingFileHandler"] == logging.DEBUG

    def test_idempotent(self, root_logger, tmp_path):
        _detach_handlers(root_logger)
        setup_logging(log_dir=tmp_path)
        assert setup_logging(log_dir=tmp_path) is None
        assert len(root_logger.handlers) == 2

    def test_unknown_level_falls_back_to_info(self, root_logger, tmp_path):
        _detach_handlers(root_logger)
        setup_logging("chatty", log_dir=tmp_path)
        console = [h for h in root_logger.handlers if type(h) is logging.StreamHandler]
        assert console[0].level == logging.INFO

    def test_skips_when_configured(self, root_logger, tmp_path):
        _detach_handlers(root_logger)
        root_logger.addHandler(logging.NullHandler())
        assert setup_logging(log_dir=tmp_path / "unused") is None
        assert not (tmp_path / "unused").exists()
