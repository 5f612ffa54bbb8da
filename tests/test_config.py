"""Tests for startup configuration checks."""

import pytest

from gateway.core import config
from gateway.core.errors import StartupConfigurationError
from gateway.main import create_app


def test_api_key_from_env(monkeypatch):
    monkeypatch.setenv("SCRAPERAPI_KEY", "  abc  ")
    assert config.get_api_key() == "abc"


@pytest.mark.parametrize("value", [None, "", "   "])
def test_missing_api_key_is_fatal(monkeypatch, value):
    if value is None:
        monkeypatch.delenv("SCRAPERAPI_KEY", raising=False)
    else:
        monkeypatch.setenv("SCRAPERAPI_KEY", value)
    with pytest.raises(StartupConfigurationError, match="SCRAPERAPI_KEY"):
        create_app()


def test_bad_integer_env(monkeypatch):
    monkeypatch.setenv("CACHE_MAX_ENTRIES", "lots")
    with pytest.raises(StartupConfigurationError, match="CACHE_MAX_ENTRIES"):
        config._env_int("CACHE_MAX_ENTRIES", 100)


def test_env_defaults(monkeypatch):
    monkeypatch.delenv("CACHE_TTL_S", raising=False)
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")
    assert config._env_int("CACHE_TTL_S", 300) == 300
    assert config._env_bool("RATE_LIMIT_ENABLED", True) is False


def test_route_ttl_override(monkeypatch):
    monkeypatch.setenv("CACHE_TTL_AMAZON_SEARCH_S", "60")
    monkeypatch.delenv("CACHE_TTL_EBAY_PRODUCT_S", raising=False)
    ttls = config.route_ttls(300)
    assert ttls["amazon_search"] == 60
    assert ttls["ebay_product"] == 300
    assert set(ttls) == set(config.ROUTES)
