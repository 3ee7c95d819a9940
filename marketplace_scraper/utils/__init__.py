"""Utils module for the Marketplace Search Scraper."""

from marketplace_scraper.utils.logger import LogContext, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "LogContext",
]
