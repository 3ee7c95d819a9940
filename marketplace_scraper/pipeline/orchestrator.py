"""
Scrape orchestrator.

Coordinates one search end to end: validate the keyword, fetch the results
page, run the extraction pipeline and stamp the result. The flow is strictly
sequential; the only awaits are the politeness delay and the network call.
"""

import time
from typing import Optional

from marketplace_scraper.config.settings import Settings, get_settings
from marketplace_scraper.extractors.product_extractor import ProductExtractor
from marketplace_scraper.models.schemas import ExtractionResult, utc_now
from marketplace_scraper.pipeline.extraction_pipeline import ExtractionPipeline
from marketplace_scraper.services.fetch_service import SearchPageFetcher
from marketplace_scraper.services.validation_service import ValidationService
from marketplace_scraper.utils.logger import LogContext, get_logger

logger = get_logger(__name__)


class ScrapeOrchestrator:
    """
    Keyword in, ``ExtractionResult`` out.

    Usage:
        async with ScrapeOrchestrator() as orchestrator:
            result = await orchestrator.scrape("headphones")

    Raises ``ValidationError`` for a bad keyword and an ``UpstreamError``
    subclass when the page cannot be fetched. Malformed-but-present markup
    never raises; it yields fewer products.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        fetcher: Optional[SearchPageFetcher] = None,
        pipeline: Optional[ExtractionPipeline] = None,
        validator: Optional[ValidationService] = None,
    ):
        self.settings = settings or get_settings()
        self.fetcher = fetcher or SearchPageFetcher(self.settings.fetch_config())
        self.pipeline = pipeline or ExtractionPipeline(
            extractor=ProductExtractor(
                max_title_length=self.settings.max_title_length,
                image_suffix=self.settings.image_size_suffix,
            ),
            parser=self.settings.html_parser,
        )
        self.validator = validator or ValidationService(
            min_keyword_length=self.settings.min_keyword_length,
        )

    async def __aenter__(self) -> "ScrapeOrchestrator":
        await self.fetcher.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.fetcher.disconnect()

    async def scrape(self, keyword: Optional[str]) -> ExtractionResult:
        """Validate, fetch and extract products for one keyword."""
        cleaned = self.validator.validate_keyword(keyword)

        with LogContext(keyword=cleaned):
            logger.info("Starting scrape")
            start_time = time.time()

            html = await self.fetcher.fetch(cleaned)
            result = self.extract(cleaned, html)

            logger.info(
                "Scrape completed",
                total_products=result.total_products,
                duration_ms=int((time.time() - start_time) * 1000),
            )
            return result

    def extract(self, keyword: str, html: str | bytes) -> ExtractionResult:
        """Run the extraction pipeline on already fetched markup."""
        products = self.pipeline.run(html)
        return ExtractionResult(keyword=keyword, products=products, timestamp=utc_now())


async def scrape_keyword(keyword: str, settings: Optional[Settings] = None) -> ExtractionResult:
    """Convenience function for a single scrape."""
    async with ScrapeOrchestrator(settings=settings) as orchestrator:
        return await orchestrator.scrape(keyword)
