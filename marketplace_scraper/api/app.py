"""
HTTP API for the Marketplace Search Scraper.

Endpoints:
    GET /api/scrape?keyword=<text>  Scrape the first results page
    GET /api/status                 Liveness check

Run with ``marketplace-scraper serve`` or
``uvicorn marketplace_scraper.api.app:app``.
"""

from typing import AsyncIterator, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from marketplace_scraper import __version__
from marketplace_scraper.config.settings import get_settings
from marketplace_scraper.models.schemas import (
    ErrorResponse,
    KeywordErrorResponse,
    ServiceStatus,
)
from marketplace_scraper.pipeline.orchestrator import ScrapeOrchestrator
from marketplace_scraper.services.fetch_service import UpstreamError, UpstreamOther
from marketplace_scraper.services.validation_service import ValidationError
from marketplace_scraper.utils.logger import get_logger

logger = get_logger(__name__)


async def get_orchestrator() -> AsyncIterator[ScrapeOrchestrator]:
    """Fresh orchestrator (and HTTP client) per request."""
    async with ScrapeOrchestrator(settings=get_settings()) as orchestrator:
        yield orchestrator


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(title="Marketplace Scraper API", version=__version__)

    @app.get("/api/scrape")
    async def scrape(
        keyword: Optional[str] = Query(default=None),
        orchestrator: ScrapeOrchestrator = Depends(get_orchestrator),
    ) -> JSONResponse:
        try:
            result = await orchestrator.scrape(keyword)
        except ValidationError as e:
            return JSONResponse(
                status_code=400,
                content=KeywordErrorResponse(error=e.message).to_dict(),
            )
        except UpstreamError as e:
            logger.warning(
                "Scrape failed",
                keyword=keyword,
                error_type=type(e).__name__,
                status=e.status_code,
            )
            return JSONResponse(
                status_code=e.status_code,
                content=ErrorResponse(error=e.message, keyword=keyword).to_dict(),
            )
        except Exception as e:
            logger.error("Unexpected scrape failure", keyword=keyword, error=str(e))
            return JSONResponse(
                status_code=UpstreamOther.status_code,
                content=ErrorResponse(
                    error=UpstreamOther.default_message,
                    keyword=keyword,
                ).to_dict(),
            )

        return JSONResponse(status_code=200, content=result.to_dict())

    @app.get("/api/status")
    async def status() -> JSONResponse:
        return JSONResponse(content=ServiceStatus().to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Internal server error"},
        )

    return app


app = create_app()
