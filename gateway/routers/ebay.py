"""
gateway/routers/ebay.py
Endpoints:
  GET /ebay/products/{product_id}      → item details
  GET /ebay/seller/{seller_id}/items   → seller's other items
  GET /ebay/search/{search_query}      → search results
  GET /ebay/category/{category_id}     → category listing
"""

from fastapi import APIRouter, Depends, Request

from gateway.core.config import ROUTE_TTL_S
from gateway.core.ratelimit import enforce_rate_limit
from gateway.routers.common import backend_key, scrape_cached
from gateway.scrapers import ebay

router = APIRouter(prefix="/ebay", tags=["ebay"], dependencies=[Depends(enforce_rate_limit)])


@router.get("/products/{product_id}")
async def get_product(product_id: str, request: Request, api_key: str = Depends(backend_key)):
    return await scrape_cached(request, ebay.product_url(product_id), api_key, ROUTE_TTL_S["ebay_product"])


@router.get("/seller/{seller_id}/items")
async def get_seller_items(seller_id: str, request: Request, api_key: str = Depends(backend_key)):
    return await scrape_cached(request, ebay.seller_items_url(seller_id), api_key, ROUTE_TTL_S["ebay_seller"])


@router.get("/search/{search_query}")
async def search(search_query: str, request: Request, api_key: str = Depends(backend_key)):
    return await scrape_cached(request, ebay.search_url(search_query), api_key, ROUTE_TTL_S["ebay_search"])


@router.get("/category/{category_id}")
async def get_category(category_id: str, request: Request, api_key: str = Depends(backend_key)):
    return await scrape_cached(request, ebay.category_url(category_id), api_key, ROUTE_TTL_S["ebay_category"])
