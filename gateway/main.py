"""
gateway/main.py  — Amazon / eBay Scraper Gateway v1
Startup: checks the ScraperAPI credential, builds the response cache +
rate limiter, launches the expired-entry sweeper.
Every product/search endpoint is one ScraperAPI call behind the cache.
"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from gateway.core.cache import CacheStore
from gateway.core.config import (
    CACHE_MAX_ENTRIES, CACHE_SWEEP_INTERVAL_S, CACHE_TTL_S, HOST, PORT, get_api_key,
)
from gateway.core.errors import register_error_handlers
from gateway.core.http_client import close_all
from gateway.core.ratelimit import RequestLimiter, build_limiter, enforce_rate_limit, install_limiter
from gateway.core.sweeper import run_sweeper
from gateway.routers import amazon, ebay

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger("main")

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info(f"🚀 Scraper Gateway v{VERSION} starting...")
    sweeper = asyncio.create_task(run_sweeper(app.state.cache, CACHE_SWEEP_INTERVAL_S))
    yield
    log.info("🛑 Shutting down...")
    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper
    await close_all()


def create_app(
    store: Optional[CacheStore] = None,
    limiter: Optional[RequestLimiter] = None,
) -> FastAPI:
    """
    Build the app. Raises StartupConfigurationError when SCRAPERAPI_KEY is
    missing, so the server never binds without a backend credential.
    """
    api_key = get_api_key()

    app = FastAPI(
        title="Amazon & eBay Scraper Gateway",
        description=(
            "Cached, rate-limited gateway to ScraperAPI for Amazon and eBay "
            "product details, reviews, offers, seller listings and search. "
            "Responses are cached per path + query for 5 minutes."
        ),
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.api_key = api_key
    app.state.cache   = store if store is not None else CacheStore(CACHE_MAX_ENTRIES, CACHE_TTL_S)

    register_error_handlers(app)
    install_limiter(app, limiter if limiter is not None else build_limiter())
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # ── Routers ──────────────────────────────────────────────────────────────
    app.include_router(amazon.router)
    app.include_router(ebay.router)

    rate_limited = [Depends(enforce_rate_limit)]

    @app.get("/", tags=["meta"], dependencies=rate_limited)
    async def root():
        return {
            "status":  "online",
            "message": "Welcome to Amazon and eBay Scraper API!",
            "version": VERSION,
            "endpoints": {
                "amazon_product": "/amazon/products/{product_id}",
                "amazon_reviews": "/amazon/products/{product_id}/reviews",
                "amazon_offers":  "/amazon/products/{product_id}/offers",
                "amazon_search":  "/amazon/search/{search_query}",
                "ebay_product":   "/ebay/products/{product_id}",
                "ebay_seller":    "/ebay/seller/{seller_id}/items",
                "ebay_search":    "/ebay/search/{search_query}",
                "ebay_category":  "/ebay/category/{category_id}",
                "health":         "/health",
                "docs":           "/docs",
            },
        }

    @app.get("/health", tags=["meta"], dependencies=rate_limited)
    async def health(request: Request):
        """Cache metadata only — keys never include api_key."""
        cache: CacheStore = request.app.state.cache
        return {
            "status":     "healthy",
            "cache":      cache.stats(),
            "cache_keys": cache.summary(),
        }

    return app


app = create_app()


def run() -> None:
    uvicorn.run("gateway.main:app", host=HOST, port=PORT)


if __name__ == "__main__":
    run()
