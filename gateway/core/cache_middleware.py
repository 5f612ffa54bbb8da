"""
gateway/core/cache_middleware.py
Response caching around a downstream fetch.

  LOOKUP → hit  → cached body, fetch never runs
         → miss → await fetch() → success → store + return
                                → failure → propagate, store nothing

The store is only touched before and after the await, so a slow backend
call never holds the cache lock. No single-flight: two concurrent misses
for one key both fetch, the later set wins.
"""

import logging
from typing import Any, Awaitable, Callable, Optional
from urllib.parse import quote, unquote_plus

from fastapi import Request

from gateway.core.cache import MISSING, CacheStore

log = logging.getLogger("cache_middleware")

# Query parameters that never take part in a cache key.
CREDENTIAL_PARAMS = frozenset({"api_key"})


def cache_key(path: str, query_string: str = "") -> str:
    """
    Normalized cache identity for a request: path + raw query string,
    order and case kept as given, credential parameters dropped.
    """
    segments = [
        seg for seg in query_string.split("&")
        if seg and unquote_plus(seg.split("=", 1)[0]) not in CREDENTIAL_PARAMS
    ]
    if not segments:
        return path
    return f"{path}?{'&'.join(segments)}"


def request_path(request: Request) -> str:
    """Path as the client sent it, still percent-encoded (C%23 ≠ C)."""
    raw = request.scope.get("raw_path")
    if raw:
        return raw.split(b"?", 1)[0].decode("latin-1")
    return quote(request.scope["path"], safe="/")


def request_cache_key(request: Request) -> str:
    return cache_key(request_path(request), request.url.query)


async def cached_call(
    store: CacheStore,
    key: str,
    fetch: Callable[[], Awaitable[Any]],
    ttl: Optional[float] = None,
) -> Any:
    value = store.get(key)
    if value is not MISSING:
        log.debug(f"HIT  {key}")
        return value

    log.debug(f"MISS {key}")
    value = await fetch()
    store.set(key, value, ttl)
    log.debug(f"STORED {key} (ttl={ttl if ttl is not None else store.default_ttl}s)")
    return value


async def serve_cached(
    request: Request,
    fetch: Callable[[], Awaitable[Any]],
    ttl: Optional[float] = None,
) -> Any:
    """Route-handler entry point: app-wide store + request-derived key."""
    store: CacheStore = request.app.state.cache
    return await cached_call(store, request_cache_key(request), fetch, ttl)
