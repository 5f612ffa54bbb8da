"""
gateway/core/errors.py
Error taxonomy + FastAPI exception handlers.

  • StartupConfigurationError → raised while building the app, fatal
  • UpstreamError             → ScraperAPI call failed, becomes a 500 {"error": ...}
  • RateLimited               → client over its window budget, becomes a 429 {"error": ...}

Cache misses are not errors, see MISSING in core/cache.py.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

log = logging.getLogger("errors")


class GatewayError(Exception):
    """Base class for everything this service raises on purpose."""


class StartupConfigurationError(GatewayError):
    """Required configuration is missing or malformed."""


class UpstreamError(GatewayError):
    """The scraping backend could not produce a usable response."""

    def __init__(self, message: str, status_code: Optional[int] = None, target: str = ""):
        super().__init__(message)
        self.message     = message
        self.status_code = status_code
        self.target      = target


class RateLimited(GatewayError):
    def __init__(self, limit: str, client: str = ""):
        super().__init__(f"Rate limit exceeded: {limit}")
        self.limit  = limit
        self.client = client


async def _upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    log.warning(f"Upstream failure on {request.url.path} (status={exc.status_code}): {exc.message}")
    return JSONResponse(status_code=500, content={"error": exc.message})


async def _rate_limited_handler(request: Request, exc: RateLimited) -> JSONResponse:
    log.info(f"Rate limited {exc.client} on {request.url.path} ({exc.limit})")
    return JSONResponse(status_code=429, content={"error": str(exc)})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UpstreamError, _upstream_error_handler)
    app.add_exception_handler(RateLimited, _rate_limited_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
