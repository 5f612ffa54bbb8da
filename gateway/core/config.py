"""
gateway/core/config.py  ── Amazon / eBay Scraper Gateway
═══════════════════════════════════════════════════════════════════════════════
BACKEND:

  ScraperAPI  →  every product / search lookup goes through
                 http://api.scraperapi.com?api_key=...&autoparse=true&url=...

SECURITY: the key must be set as an environment variable, NOT hardcoded.
          SCRAPERAPI_KEY missing → the app refuses to start.
═══════════════════════════════════════════════════════════════════════════════
"""

import os

from gateway.core.errors import StartupConfigurationError


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise StartupConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise StartupConfigurationError(f"{name} must be a number, got {raw!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


# ── ScraperAPI ────────────────────────────────────────────────────────────────
SCRAPERAPI_BASE   = os.environ.get("SCRAPERAPI_BASE", "http://api.scraperapi.com")
SCRAPER_TIMEOUT_S = _env_float("SCRAPER_TIMEOUT_S", 60.0)


def get_api_key() -> str:
    """Return the backend credential. Raises when it is not configured."""
    key = os.environ.get("SCRAPERAPI_KEY", "").strip()
    if not key:
        raise StartupConfigurationError(
            "SCRAPERAPI_KEY env var not set — refusing to start without a backend credential"
        )
    return key


# ── Cache ─────────────────────────────────────────────────────────────────────
CACHE_MAX_ENTRIES      = _env_int("CACHE_MAX_ENTRIES", 100)
CACHE_TTL_S            = _env_int("CACHE_TTL_S", 5 * 60)       # 5 min
CACHE_SWEEP_INTERVAL_S = _env_int("CACHE_SWEEP_INTERVAL_S", 60)  # 0 → no sweeper

ROUTES = (
    "amazon_product", "amazon_reviews", "amazon_offers", "amazon_search",
    "ebay_product", "ebay_seller", "ebay_search", "ebay_category",
)


def route_ttls(default: int) -> dict[str, int]:
    """Per-route TTL; CACHE_TTL_<ROUTE>_S (e.g. CACHE_TTL_AMAZON_SEARCH_S) overrides the default."""
    return {name: _env_int(f"CACHE_TTL_{name.upper()}_S", default) for name in ROUTES}


ROUTE_TTL_S = route_ttls(CACHE_TTL_S)

# ── Rate limiting (fixed window per client IP) ────────────────────────────────
RATE_LIMIT         = os.environ.get("RATE_LIMIT", "100/minute")
RATE_LIMIT_ENABLED = _env_bool("RATE_LIMIT_ENABLED", True)

# ── Server ────────────────────────────────────────────────────────────────────
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = _env_int("PORT", 5000)

# ── Target sites ──────────────────────────────────────────────────────────────
AMAZON_BASE = "https://www.amazon.com"
EBAY_BASE   = "https://www.ebay.com"
