"""
gateway/scrapers/amazon.py
Target page URLs on amazon.com. Pure string building, no I/O.
"""

from urllib.parse import quote

from gateway.core.config import AMAZON_BASE


def product_url(product_id: str) -> str:
    return f"{AMAZON_BASE}/dp/{product_id}"


def reviews_url(product_id: str) -> str:
    return f"{AMAZON_BASE}/product-reviews/{product_id}"


def offers_url(product_id: str) -> str:
    return f"{AMAZON_BASE}/gp/offer-listing/{product_id}"


def search_url(search_query: str) -> str:
    return f"{AMAZON_BASE}/s?k={quote(search_query, safe='')}"
