"""Configuration module for the Marketplace Search Scraper."""

from marketplace_scraper.config.settings import FetchConfig, Settings, get_settings

__all__ = ["FetchConfig", "Settings", "get_settings"]
