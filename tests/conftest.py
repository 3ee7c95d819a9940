import pytest
import httpx
from pathlib import Path
from bs4 import BeautifulSoup

from marketplace_scraper.config.settings import Settings, FetchConfig
from marketplace_scraper.services.fetch_service import SearchPageFetcher
from marketplace_scraper.pipeline.orchestrator import ScrapeOrchestrator


@pytest.fixture
def fixtures_dir():
    return Path(__file__).parent / "fixtures"

@pytest.fixture
def search_results_path(fixtures_dir):
    return fixtures_dir / "search_results.html"

@pytest.fixture
def search_results_html(search_results_path):
    return search_results_path.read_text(encoding="utf-8")

@pytest.fixture
def search_results_soup(search_results_html):
    return BeautifulSoup(search_results_html, "html.parser")

@pytest.fixture
def test_settings():
    """Real settings with the politeness delay and retry backoff disabled."""
    return Settings(
        REQUEST_DELAY_SECONDS=0,
        MAX_RETRIES=1,
        RETRY_BACKOFF_SECONDS=0,
        USER_AGENT="pytest-agent",
    )

@pytest.fixture
def fetch_config():
    return FetchConfig(
        headers={"User-Agent": "pytest-agent"},
        request_delay_seconds=0,
        max_retries=1,
        retry_backoff_seconds=0,
    )

@pytest.fixture
def html_handler(search_results_html):
    """Transport handler that serves the fixture page and records requests."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, text=search_results_html)

    handler.requests = requests
    return handler

@pytest.fixture
def make_orchestrator(test_settings):
    """Build an orchestrator whose fetcher talks to a mock transport."""
    def make(handler) -> ScrapeOrchestrator:
        fetcher = SearchPageFetcher(
            test_settings.fetch_config(),
            transport=httpx.MockTransport(handler),
        )
        return ScrapeOrchestrator(settings=test_settings, fetcher=fetcher)
    return make
