"""
gateway/routers/amazon.py
Endpoints:
  GET /amazon/products/{product_id}          → product details
  GET /amazon/products/{product_id}/reviews  → product reviews
  GET /amazon/products/{product_id}/offers   → offer listing
  GET /amazon/search/{search_query}          → search results

Each is one ScraperAPI call behind the response cache (5 min by default).
"""

from fastapi import APIRouter, Depends, Request

from gateway.core.config import ROUTE_TTL_S
from gateway.core.ratelimit import enforce_rate_limit
from gateway.routers.common import backend_key, scrape_cached
from gateway.scrapers import amazon

router = APIRouter(prefix="/amazon", tags=["amazon"], dependencies=[Depends(enforce_rate_limit)])


@router.get("/products/{product_id}")
async def get_product(product_id: str, request: Request, api_key: str = Depends(backend_key)):
    return await scrape_cached(request, amazon.product_url(product_id), api_key, ROUTE_TTL_S["amazon_product"])


@router.get("/products/{product_id}/reviews")
async def get_reviews(product_id: str, request: Request, api_key: str = Depends(backend_key)):
    return await scrape_cached(request, amazon.reviews_url(product_id), api_key, ROUTE_TTL_S["amazon_reviews"])


@router.get("/products/{product_id}/offers")
async def get_offers(product_id: str, request: Request, api_key: str = Depends(backend_key)):
    return await scrape_cached(request, amazon.offers_url(product_id), api_key, ROUTE_TTL_S["amazon_offers"])


@router.get("/search/{search_query}")
async def search(search_query: str, request: Request, api_key: str = Depends(backend_key)):
    return await scrape_cached(request, amazon.search_url(search_query), api_key, ROUTE_TTL_S["amazon_search"])
