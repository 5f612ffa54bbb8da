"""Tests for ScraperAPI request building and the single backend call."""

import httpx
import pytest

from gateway.core.config import SCRAPERAPI_BASE
from gateway.core.errors import UpstreamError
from gateway.scrapers import amazon, ebay, scraperapi


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestTargetUrls:
    def test_amazon(self):
        assert amazon.product_url("B001") == "https://www.amazon.com/dp/B001"
        assert amazon.reviews_url("B001") == "https://www.amazon.com/product-reviews/B001"
        assert amazon.offers_url("B001") == "https://www.amazon.com/gp/offer-listing/B001"
        assert amazon.search_url("usb c/hub&more") == "https://www.amazon.com/s?k=usb%20c%2Fhub%26more"

    def test_ebay(self):
        assert ebay.product_url("1234") == "https://www.ebay.com/itm/1234"
        assert ebay.category_url("58058") == "https://www.ebay.com/b/58058"
        assert ebay.search_url("desk lamp") == "https://www.ebay.com/sch/i.html?_nkw=desk%20lamp"
        assert ebay.seller_items_url("bob") == (
            "https://www.ebay.com/sch/m.html?_ssn=bob&_from=R40"
            "&_trksid=p2499338.m570.l1313&_nkw=bob&_sacat=0"
        )


class TestBuildRequest:
    def test_params(self):
        req = scraperapi.build_request("https://www.amazon.com/dp/B001", "key-1")
        assert req.url == SCRAPERAPI_BASE
        assert req.params == {
            "api_key":   "key-1",
            "autoparse": "true",
            "url":       "https://www.amazon.com/dp/B001",
        }


class TestFetch:
    @pytest.mark.asyncio
    async def test_returns_json_payload(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json={"name": "Widget"})

        async with _client(handler) as client:
            target = ebay.seller_items_url("bob")
            result = await scraperapi.fetch(target, "key-1", client=client)

        assert result == {"name": "Widget"}
        assert seen["params"] == {"api_key": "key-1", "autoparse": "true", "url": target}

    @pytest.mark.asyncio
    async def test_non_json_body_relayed_as_text(self):
        def handler(request):
            return httpx.Response(200, text="<html>not parsed</html>")

        async with _client(handler) as client:
            result = await scraperapi.fetch("https://www.ebay.com/b/1", "k", client=client)
        assert result == "<html>not parsed</html>"

    @pytest.mark.asyncio
    async def test_non_2xx_raises_upstream_error(self):
        def handler(request):
            return httpx.Response(403, text="Invalid API key")

        async with _client(handler) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await scraperapi.fetch("https://www.amazon.com/dp/B001", "bad", client=client)

        assert exc_info.value.status_code == 403
        assert "403" in exc_info.value.message
        assert exc_info.value.target == "https://www.amazon.com/dp/B001"

    @pytest.mark.asyncio
    async def test_timeout_raises_upstream_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with _client(handler) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await scraperapi.fetch("https://www.amazon.com/dp/B001", "k", client=client)
        assert "Timed out" in exc_info.value.message
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    @pytest.mark.asyncio
    async def test_connection_error_raises_upstream_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(UpstreamError, match="connection refused"):
                await scraperapi.fetch("https://www.amazon.com/dp/B001", "k", client=client)
