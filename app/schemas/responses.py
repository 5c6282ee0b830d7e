from typing import Any, Literal

from pydantic import BaseModel

from app.schemas.profile import BusinessProfile
from app.schemas.website import PageMetadata

ProfileSource = Literal["agent", "heuristic"]


class AnalyzeRequest(BaseModel):
    url: Any = None  # type-checked by the router so bad input maps to "Invalid URL format"


class AnalyzeResponse(BaseModel):
    success: bool = True
    data: BusinessProfile
    cached: bool
    source: ProfileSource = "agent"


class ScrapeResponse(BaseModel):
    success: bool = True
    data: PageMetadata


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
