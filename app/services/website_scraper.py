import logging

import httpx

from app.exceptions.custom import FetchError
from app.mappers.page_metadata import extract_metadata
from app.schemas.website import PageMetadata

logger = logging.getLogger(__name__)

_MAX_BODY = 2 * 1024 * 1024  # 2 MB
_TIMEOUT = 10.0
_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class WebsiteScraperService:
    def __init__(self, client: httpx.AsyncClient, timeout: float = _TIMEOUT):
        self._client = client
        self._timeout = timeout

    async def scrape(self, url: str) -> PageMetadata:
        """Fetch a page and pattern-match its metadata."""
        html = await self.fetch_page(url)
        return extract_metadata(html)

    async def fetch_page(self, url: str) -> str:
        """Fetch a page and return its HTML. Raises FetchError on any failure."""
        try:
            resp = await self._client.get(
                url,
                follow_redirects=True,
                timeout=self._timeout,
                headers={"User-Agent": _USER_AGENT},
            )
            resp.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Timed out fetching %s", url)
            raise FetchError(f"Failed to fetch website: timed out after {self._timeout:g}s") from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("Fetching %s returned HTTP %d", url, status)
            raise FetchError(
                f"Failed to fetch website: HTTP {status}: {exc.response.reason_phrase}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Failed to fetch %s: %s", url, exc)
            raise FetchError(f"Failed to fetch website: {exc}") from exc

        content_type = resp.headers.get("content-type", "")
        if "html" not in content_type:
            logger.debug("Non-HTML %s (content-type: %s)", url, content_type)
            raise FetchError(f"Failed to fetch website: unexpected content type {content_type!r}")

        if len(resp.content) > _MAX_BODY:
            logger.debug("Oversized page %s (%d bytes)", url, len(resp.content))
            raise FetchError(f"Failed to fetch website: page exceeds {_MAX_BODY} bytes")

        return resp.text
