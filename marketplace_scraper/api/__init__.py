"""HTTP API module for the Marketplace Search Scraper."""

from marketplace_scraper.api.app import app, create_app, get_orchestrator

__all__ = ["app", "create_app", "get_orchestrator"]
