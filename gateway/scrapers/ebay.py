"""
gateway/scrapers/ebay.py
Target page URLs on ebay.com. Pure string building, no I/O.
"""

from urllib.parse import quote

from gateway.core.config import EBAY_BASE


def product_url(product_id: str) -> str:
    return f"{EBAY_BASE}/itm/{product_id}"


def seller_items_url(seller_id: str) -> str:
    # Same listing eBay shows under "Seller's other items"
    return (
        f"{EBAY_BASE}/sch/m.html?_ssn={seller_id}&_from=R40"
        f"&_trksid=p2499338.m570.l1313&_nkw={seller_id}&_sacat=0"
    )


def search_url(search_query: str) -> str:
    return f"{EBAY_BASE}/sch/i.html?_nkw={quote(search_query, safe='')}"


def category_url(category_id: str) -> str:
    return f"{EBAY_BASE}/b/{category_id}"
