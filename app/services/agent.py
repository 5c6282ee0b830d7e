import asyncio
import logging

from anthropic import APIError, AsyncAnthropic

from app.exceptions.custom import AgentTimeoutError, UpstreamError
from app.schemas.profile import BusinessProfile
from app.services.json_extractor import extract_profile

logger = logging.getLogger(__name__)

MODEL = "claude-sonnet-4-20250514"
DEFAULT_TIMEOUT = 30.0
MAX_TOKENS = 2048

# Server-side tool runs can pause mid-turn; resume at most this many times.
MAX_CONTINUATIONS = 3

_PROMPT_TEMPLATE = """You are a web research agent. Analyze this website and extract structured business information.

Website URL: {url}

Extract and respond with ONLY a valid JSON object (no markdown, no code blocks, no additional text) in this exact format:
{{
  "name": "company name",
  "description": "brief description",
  "website": "url",
  "contact": {{
    "email": "email or null",
    "phone": "phone or null"
  }},
  "socialMedia": {{
    "linkedin": "url or null",
    "twitter": "url or null",
    "facebook": "url or null",
    "instagram": "url or null",
    "youtube": "url or null"
  }},
  "registrationNumber": "registration number or null"
}}

Task:
1. Use the web_search tool to visit and analyze the website
2. Extract company name, description, contact info
3. Find all social media profiles (LinkedIn, Twitter, Facebook, Instagram, YouTube)
4. Look for business registration number if available
5. Return ONLY the JSON object with all extracted information"""


def build_prompt(url: str) -> str:
    return _PROMPT_TEMPLATE.format(url=url)


def _response_text(response) -> str:
    # Cited replies split one answer across blocks, sometimes mid-string.
    return "".join(
        block.text for block in response.content if getattr(block, "type", None) == "text"
    )


class AgentService:
    """Ask a web-browsing model for a business profile, bounded by a deadline."""

    def __init__(
        self,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        model: str = MODEL,
        max_web_searches: int = 5,
    ):
        # Retries belong to the caller, not the SDK.
        self._client = AsyncAnthropic(api_key=api_key, max_retries=0)
        self._timeout = timeout
        self._model = model
        self._tools = [{
            "type": "web_search_20250305",
            "name": "web_search",
            "max_uses": max_web_searches,
        }]

    @property
    def timeout(self) -> float:
        return self._timeout

    async def analyze(self, url: str) -> BusinessProfile:
        """Return the profile for ``url``.

        Raises AgentTimeoutError when the deadline passes (the in-flight
        request is cancelled), UpstreamError when the API call fails, and
        ExtractionError/ParseError when the reply carries no usable JSON.
        """
        logger.info("Starting analysis for %s", url)
        try:
            text = await asyncio.wait_for(self._complete(url), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.warning("Agent timed out after %ss for %s", self._timeout, url)
            raise AgentTimeoutError(self._timeout) from None
        except APIError as exc:
            logger.error("Agent API call failed for %s: %s", url, exc)
            raise UpstreamError(f"Failed to analyze website: {exc}") from exc

        logger.info("Response received for %s", url)
        logger.debug("Agent response for %s: %s", url, text)
        return extract_profile(text)

    async def _complete(self, url: str) -> str:
        messages: list[dict] = [{"role": "user", "content": build_prompt(url)}]

        for _ in range(MAX_CONTINUATIONS + 1):
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=MAX_TOKENS,
                tools=self._tools,
                messages=messages,
            )
            if response.stop_reason != "pause_turn":
                break
            messages = [*messages, {"role": "assistant", "content": response.content}]

        return _response_text(response)
