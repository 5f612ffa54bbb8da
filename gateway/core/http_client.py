"""
gateway/core/http_client.py
Shared async httpx client for ScraperAPI.
  • scraper_client() → lazily (re)created, pooled
  • close_all()      → called from the app lifespan on shutdown
"""

import httpx

from gateway.core.config import SCRAPER_TIMEOUT_S

_scraper_client: httpx.AsyncClient | None = None

_LIMITS  = httpx.Limits(max_connections=20, max_keepalive_connections=10)
# ScraperAPI can take up to a minute on hard targets
_TIMEOUT = httpx.Timeout(SCRAPER_TIMEOUT_S, connect=15.0)


def scraper_client() -> httpx.AsyncClient:
    global _scraper_client
    if _scraper_client is None or _scraper_client.is_closed:
        _scraper_client = httpx.AsyncClient(
            timeout=_TIMEOUT,
            follow_redirects=True,
            limits=_LIMITS,
        )
    return _scraper_client


async def close_all() -> None:
    global _scraper_client
    if _scraper_client and not _scraper_client.is_closed:
        await _scraper_client.aclose()
    _scraper_client = None
