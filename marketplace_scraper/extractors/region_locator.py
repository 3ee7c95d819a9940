"""
Region locator for search result pages.

Finds the DOM subtrees that represent individual product listings. Strategies
are tried from most to least specific; the first one that matches anything
wins and later ones are never consulted, so matches from different markup
layouts are never mixed.
"""

from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Tag

from marketplace_scraper.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RegionStrategy:
    """A named CSS selector for product regions."""
    name: str
    selector: str


DEFAULT_STRATEGIES: tuple[RegionStrategy, ...] = (
    RegionStrategy("search_result", '[data-component-type="s-search-result"]'),
    RegionStrategy("result_item", ".s-result-item"),
    RegionStrategy("asin_attribute", '[data-asin]:not([data-asin=""])'),
)


@dataclass
class LocatedRegions:
    """Regions found in a document and the strategy that produced them."""
    regions: list[Tag] = field(default_factory=list)
    strategy: str | None = None

    def __len__(self) -> int:
        return len(self.regions)

    def __iter__(self):
        return iter(self.regions)


class RegionLocator:
    """Locates product regions using an ordered list of selector strategies."""

    def __init__(self, strategies: tuple[RegionStrategy, ...] = DEFAULT_STRATEGIES):
        self.strategies = strategies

    def locate(self, document: BeautifulSoup | Tag) -> LocatedRegions:
        """Return the regions matched by the first strategy with any match."""
        for strategy in self.strategies:
            matches = document.select(strategy.selector)
            if matches:
                logger.debug(
                    "Product regions located",
                    strategy=strategy.name,
                    region_count=len(matches),
                )
                return LocatedRegions(regions=list(matches), strategy=strategy.name)

        logger.info("No product regions found")
        return LocatedRegions()


def locate_regions(document: BeautifulSoup | Tag) -> list[Tag]:
    """Convenience wrapper returning only the region list."""
    return RegionLocator().locate(document).regions
