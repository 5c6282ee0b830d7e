import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from app.cache import TTLCache
from app.config import Settings
from app.exceptions.custom import AnalysisError, InvalidURLError
from app.exceptions.handlers import (
    analysis_error_handler,
    invalid_url_error_handler,
    request_validation_error_handler,
)
from app.routers.analysis import router as analysis_router
from app.services.agent import AgentService
from app.services.analysis import AnalysisService
from app.services.website_scraper import WebsiteScraperService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    async with httpx.AsyncClient() as client:
        agent = AgentService(
            settings.anthropic_api_key,
            timeout=settings.agent_timeout_seconds,
            model=settings.agent_model,
            max_web_searches=settings.agent_max_web_searches,
        )
        scraper = WebsiteScraperService(client, timeout=settings.fetch_timeout_seconds)
        cache = TTLCache(ttl_seconds=settings.cache_ttl_hours * 3600)

        app.state.analysis_service = AnalysisService(
            agent,
            cache,
            scraper=scraper,
            heuristic_fallback=settings.heuristic_fallback,
        )
        logger.info(
            "Service ready (model=%s, timeout=%ss, cache_ttl=%sh, heuristic_fallback=%s)",
            settings.agent_model,
            settings.agent_timeout_seconds,
            settings.cache_ttl_hours,
            settings.heuristic_fallback,
        )

        yield


app = FastAPI(title="Website Analysis API", lifespan=lifespan)

app.add_exception_handler(InvalidURLError, invalid_url_error_handler)
app.add_exception_handler(AnalysisError, analysis_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)

app.include_router(analysis_router)
