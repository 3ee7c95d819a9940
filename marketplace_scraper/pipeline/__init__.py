"""Pipeline module for the Marketplace Search Scraper."""

from marketplace_scraper.pipeline.extraction_pipeline import ExtractionPipeline
from marketplace_scraper.pipeline.orchestrator import ScrapeOrchestrator, scrape_keyword

__all__ = [
    "ExtractionPipeline",
    "ScrapeOrchestrator",
    "scrape_keyword",
]
