"""
Tests for the logging helpers and wordlist loading
"""
import logging

import pytest

from tronkit.core import get_logger, set_log_level
from tronkit.data import load_wordlist, word_index


def test_logger_handlers_not_duplicated():
    first = get_logger("tronkit.test_logging")
    second = get_logger("tronkit.test_logging")
    assert first is second
    assert len(first.handlers) == 1


def test_log_file(tmp_path):
    log_file = tmp_path / "logs" / "tronkit.log"
    logger = get_logger("tronkit.test_logging.file", log_file=log_file)
    logger.info("derived address TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t")
    for handler in logger.handlers:
        handler.flush()
    assert "[INFO]" in log_file.read_text()


def test_set_log_level():
    logger = get_logger("tronkit.test_logging.level")
    set_log_level("WARNING")
    try:
        assert logger.level == logging.WARNING
        later = get_logger("tronkit.test_logging.created_later")
        assert later.level == logging.WARNING, "Loggers created after set_log_level must follow it"
        assert get_logger("tronkit.test_logging.explicit", log_level="DEBUG").level == logging.DEBUG
    finally:
        set_log_level("INFO")
    assert logger.level == logging.INFO


def test_unknown_level():
    with pytest.raises(ValueError):
        set_log_level("LOUD")


def test_wordlist():
    words = load_wordlist()
    assert len(words) == 2048
    assert words[0] == "abandon" and words[-1] == "zoo"
    assert word_index()["about"] == 3
