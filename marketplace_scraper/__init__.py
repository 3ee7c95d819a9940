"""
Marketplace Search Scraper.

Fetches a marketplace search results page for a keyword and extracts
product records (title, rating, review count, image URL) from its markup.
"""

__version__ = "1.0.0"
__author__ = "Marketplace Scraper Team"

# Lazy imports to avoid circular dependencies
def get_orchestrator():
    """Get the ScrapeOrchestrator class (lazy import)."""
    from marketplace_scraper.pipeline.orchestrator import ScrapeOrchestrator
    return ScrapeOrchestrator

__all__ = ["get_orchestrator", "__version__"]
