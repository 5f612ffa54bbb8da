"""
gateway/scrapers/scraperapi.py
═══════════════════════════════════════════════════════════════════════════════
ScraperAPI — the only backend this gateway talks to.

  GET {SCRAPERAPI_BASE}?api_key=...&autoparse=true&url=<target page>

autoparse=true makes ScraperAPI return structured JSON for Amazon / eBay
pages. The body is relayed as-is; a non-JSON body is relayed as text.
One call per request, no retries. Any failure becomes UpstreamError.
═══════════════════════════════════════════════════════════════════════════════
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from gateway.core.config import SCRAPERAPI_BASE
from gateway.core.errors import UpstreamError
from gateway.core.http_client import scraper_client

log = logging.getLogger("scraperapi")


@dataclass(frozen=True)
class UpstreamRequest:
    url:    str
    params: dict[str, str]
    target: str


def build_request(target: str, api_key: str) -> UpstreamRequest:
    return UpstreamRequest(
        url=SCRAPERAPI_BASE,
        params={"api_key": api_key, "autoparse": "true", "url": target},
        target=target,
    )


def _error_message(resp: httpx.Response) -> str:
    detail = resp.text.strip()[:200]
    return f"Request failed with status code {resp.status_code}" + (f": {detail}" if detail else "")


async def fetch(target: str, api_key: str, client: Optional[httpx.AsyncClient] = None) -> Any:
    """Scrape one target page through ScraperAPI and return its payload."""
    req    = build_request(target, api_key)
    client = client or scraper_client()

    try:
        resp = await client.get(req.url, params=req.params)
    except httpx.TimeoutException as ex:
        raise UpstreamError(f"Timed out scraping {target}", target=target) from ex
    except httpx.HTTPError as ex:
        raise UpstreamError(str(ex) or type(ex).__name__, target=target) from ex

    if not resp.is_success:
        raise UpstreamError(_error_message(resp), status_code=resp.status_code, target=target)

    log.info(f"Scraped {target} ({resp.status_code}, {len(resp.content)} bytes)")
    try:
        return resp.json()
    except ValueError:
        return resp.text
