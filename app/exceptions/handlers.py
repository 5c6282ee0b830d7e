import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .custom import AnalysisError, InvalidURLError

logger = logging.getLogger(__name__)


def _error_body(message: str) -> dict:
    return {"success": False, "error": message}


async def invalid_url_error_handler(_request: Request, exc: InvalidURLError) -> JSONResponse:
    logger.info("Rejected request: %s", exc.message)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))


async def analysis_error_handler(_request: Request, exc: AnalysisError) -> JSONResponse:
    logger.error("%s: %s (status=%s)", type(exc).__name__, exc.message, exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))


async def request_validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("Rejected malformed request body: %s", exc.errors())
    return JSONResponse(status_code=400, content=_error_body("Invalid request body"))
