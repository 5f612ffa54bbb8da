"""
gateway/routers/common.py
Shared route plumbing: credential resolution + the cached ScraperAPI call
every route ends in.
"""

from typing import Any, Optional

from fastapi import Query, Request

from gateway.core.cache_middleware import serve_cached
from gateway.scrapers import scraperapi


def backend_key(
    request: Request,
    api_key: Optional[str] = Query(None, description="ScraperAPI key (defaults to the server's own)"),
) -> str:
    return api_key or request.app.state.api_key


async def scrape_cached(request: Request, target: str, api_key: str, ttl: Optional[float] = None) -> Any:
    return await serve_cached(request, lambda: scraperapi.fetch(target, api_key), ttl)
