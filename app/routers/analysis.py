from urllib.parse import urlsplit

from fastapi import APIRouter

from app.dependencies import AnalysisDep
from app.exceptions.custom import InvalidURLError
from app.schemas.responses import AnalyzeRequest, AnalyzeResponse, ScrapeResponse

router = APIRouter()


def is_valid_url(url: str) -> bool:
    try:
        parts = urlsplit(url)
        return bool(parts.scheme and parts.hostname)
    except ValueError:
        return False


def _require_url(request: AnalyzeRequest | None) -> str:
    url = request.url if request else None
    if isinstance(url, str):
        url = url.strip()
    if url is None or url == "":
        raise InvalidURLError("URL is required")
    if not isinstance(url, str) or not is_valid_url(url):
        raise InvalidURLError("Invalid URL format")
    return url


@router.get("/")
async def health() -> dict:
    return {
        "message": "Website Analysis API is running",
        "endpoints": {
            "analyze": "POST /analyze-website",
            "scrape": "POST /scrape-website",
            "clear_cache": "DELETE /cache",
        },
    }


@router.post("/analyze-website", response_model=AnalyzeResponse)
async def analyze_website(
    service: AnalysisDep,
    request: AnalyzeRequest | None = None,
) -> AnalyzeResponse:
    url = _require_url(request)
    result = await service.analyze(url)
    return AnalyzeResponse(data=result.profile, cached=result.cached, source=result.source)


@router.post("/scrape-website", response_model=ScrapeResponse)
async def scrape_website(
    service: AnalysisDep,
    request: AnalyzeRequest | None = None,
) -> ScrapeResponse:
    url = _require_url(request)
    return ScrapeResponse(data=await service.scrape(url))


@router.delete("/cache")
async def clear_cache(service: AnalysisDep) -> dict:
    service.clear_cache()
    return {"success": True}
