import pytest
import structlog
from marketplace_scraper.utils.logger import setup_logging, get_logger, LogContext

def test_setup_logging():
    # Calling it shouldn't crash
    setup_logging(level="DEBUG", json_format=False)
    setup_logging(level="INFO", json_format=True)

def test_get_logger():
    logger = get_logger("test_module")
    assert logger is not None
    # Test logging doesn't crash
    logger.info("test message", key="value")

def test_log_context_binds_and_unbinds():
    with LogContext(keyword="mouse"):
        assert structlog.contextvars.get_contextvars()["keyword"] == "mouse"
    assert "keyword" not in structlog.contextvars.get_contextvars()
