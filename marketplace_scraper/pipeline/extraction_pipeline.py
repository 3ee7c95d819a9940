"""
Extraction pipeline: results page markup -> ordered product records.

Runs the region locator, then the product extractor over every region in
document order, keeps accepted records and renumbers them densely from 1.
The pipeline is a pure function of the document.
"""

from bs4 import BeautifulSoup

from marketplace_scraper.extractors.product_extractor import ProductExtractor
from marketplace_scraper.extractors.region_locator import RegionLocator
from marketplace_scraper.models.schemas import ProductRecord
from marketplace_scraper.utils.logger import get_logger

logger = get_logger(__name__)


class ExtractionPipeline:
    """Locate regions, extract records, renumber."""

    def __init__(
        self,
        locator: RegionLocator | None = None,
        extractor: ProductExtractor | None = None,
        parser: str = "html.parser",
    ):
        self.locator = locator or RegionLocator()
        self.extractor = extractor or ProductExtractor()
        self.parser = parser

    def parse(self, markup: str | bytes) -> BeautifulSoup:
        return BeautifulSoup(markup, self.parser)

    def run(self, document: str | bytes | BeautifulSoup) -> list[ProductRecord]:
        """
        Extract all product records from a results page.

        Args:
            document: Raw markup or an already parsed tree.

        Returns:
            Records in document order with ``sequence_id`` 1..n. Empty when
            the page has no recognizable product regions.
        """
        if not isinstance(document, BeautifulSoup):
            document = self.parse(document)

        located = self.locator.locate(document)

        kept: list[ProductRecord] = []
        for index, region in enumerate(located):
            record = self.extractor.extract(region, index)
            if record is not None:
                kept.append(record)

        products = [
            record.model_copy(update={"sequence_id": position})
            for position, record in enumerate(kept, start=1)
        ]

        logger.info(
            "Extraction completed",
            strategy=located.strategy,
            region_count=len(located),
            product_count=len(products),
            dropped_count=len(located) - len(products),
        )
        return products
