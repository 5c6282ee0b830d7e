"""Recover a BusinessProfile from free-text model output.

Models are asked for bare JSON but regularly wrap it in prose or markdown
fences. Each strategy below proposes one candidate substring; candidates are
tried in order and the first one that decodes to a JSON object wins.
"""

import json
import logging
import re
from collections.abc import Callable

from app.exceptions.custom import ExtractionError, ParseError
from app.schemas.profile import BusinessProfile

logger = logging.getLogger(__name__)

# Greedy: first "{" through last "}"
_OBJECT_SPAN_RE = re.compile(r"\{[\s\S]*\}")
_FENCED_RE = re.compile(r"```(?:json)?\s*(\{[\s\S]*?\})\s*```", re.I)


def raw_object_span(text: str) -> str | None:
    m = _OBJECT_SPAN_RE.search(text)
    return m.group(0) if m else None


def fenced_block(text: str) -> str | None:
    m = _FENCED_RE.search(text)
    return m.group(1) if m else None


Strategy = Callable[[str], str | None]

STRATEGIES: tuple[Strategy, ...] = (raw_object_span, fenced_block)


def locate_json_object(text: str, strategies: tuple[Strategy, ...] = STRATEGIES) -> dict:
    """Return the first JSON object any strategy can locate and decode.

    Raises ExtractionError when no strategy finds a candidate, ParseError when
    candidates were found but none decoded to an object.
    """
    last_error: str | None = None

    for strategy in strategies:
        candidate = strategy(text)
        if candidate is None:
            continue
        try:
            obj = json.loads(candidate)
        except (json.JSONDecodeError, ValueError) as exc:
            logger.debug("Strategy %s candidate did not parse: %s", strategy.__name__, exc)
            last_error = str(exc)
            continue
        if isinstance(obj, dict):
            return obj
        last_error = f"expected a JSON object, got {type(obj).__name__}"

    if last_error is None:
        logger.error("Could not find JSON in response: %s", text)
        raise ExtractionError(text)

    logger.error("Failed to parse JSON from response: %s", text)
    raise ParseError(f"Failed to parse JSON from agent response: {last_error}")


def extract_profile(text: str) -> BusinessProfile:
    return BusinessProfile.from_payload(locate_json_object(text))
