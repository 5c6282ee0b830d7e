import asyncio
import logging
from dataclasses import dataclass

from app.cache import TTLCache, normalize_cache_key
from app.exceptions.custom import AgentTimeoutError, FetchError, UpstreamError
from app.mappers.page_metadata import to_business_profile
from app.schemas.profile import BusinessProfile
from app.schemas.responses import ProfileSource
from app.schemas.website import PageMetadata
from app.services.agent import AgentService
from app.services.website_scraper import WebsiteScraperService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    profile: BusinessProfile
    cached: bool
    source: ProfileSource = "agent"


class AnalysisService:
    """Cache-fronted profile extraction.

    Concurrent requests for the same cache key share one in-flight attempt
    and receive its result or its error. Heuristic fallback is opt-in and
    only covers agent timeouts and upstream failures.
    """

    def __init__(
        self,
        agent: AgentService,
        cache: TTLCache,
        scraper: WebsiteScraperService | None = None,
        heuristic_fallback: bool = False,
    ):
        self._agent = agent
        self._cache = cache
        self._scraper = scraper
        self._heuristic_fallback = heuristic_fallback and scraper is not None
        self._in_flight: dict[str, asyncio.Task[AnalysisResult]] = {}

    @property
    def cache(self) -> TTLCache:
        return self._cache

    async def analyze(self, url: str) -> AnalysisResult:
        key = normalize_cache_key(url)

        cached = self._cache.get(key)
        if cached is not None:
            logger.info("Cache hit for %s", key)
            return AnalysisResult(profile=cached, cached=True)

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.create_task(self._extract(url, key))
            self._in_flight[key] = task
            task.add_done_callback(lambda done: self._release(key, done))
        else:
            logger.info("Joining in-flight analysis for %s", key)

        return await asyncio.shield(task)

    async def scrape(self, url: str) -> PageMetadata:
        if self._scraper is None:
            raise FetchError("Website scraping is not configured")
        return await self._scraper.scrape(url)

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.info("Cache cleared")

    def _release(self, key: str, task: asyncio.Task) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        # Every waiter may have gone away; mark the failure as retrieved.
        if not task.cancelled():
            task.exception()

    async def _extract(self, url: str, key: str) -> AnalysisResult:
        try:
            profile = await self._agent.analyze(url)
        except (AgentTimeoutError, UpstreamError) as exc:
            if not self._heuristic_fallback:
                raise
            return await self._fallback(url, exc)

        self._cache.set(key, profile)
        return AnalysisResult(profile=profile, cached=False)

    async def _fallback(self, url: str, cause: Exception) -> AnalysisResult:
        logger.warning("Agent failed for %s (%s); falling back to page heuristics", url, cause)
        try:
            metadata = await self._scraper.scrape(url)
        except FetchError as fetch_exc:
            logger.error("Heuristic fallback failed for %s: %s", url, fetch_exc.message)
            raise cause from fetch_exc
        # Degraded results are not cached so the next request retries the agent.
        return AnalysisResult(
            profile=to_business_profile(metadata, url),
            cached=False,
            source="heuristic",
        )
