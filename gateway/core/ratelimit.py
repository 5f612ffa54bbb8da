"""
gateway/core/ratelimit.py
Per-client fixed-window request limiter (slowapi / limits, in-memory storage).

Routers declare `dependencies=[Depends(enforce_rate_limit)]`, so the check
runs before the handler: an over-budget client gets a 429 before any
cache code runs.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from gateway.core.config import RATE_LIMIT, RATE_LIMIT_ENABLED
from gateway.core.errors import RateLimited

log = logging.getLogger("ratelimit")


class RequestLimiter:
    """One fixed-window budget per client IP, shared by every route."""

    def __init__(self, limit: str, enabled: bool = True):
        self.limit   = limit
        self.item    = parse(limit)
        self.enabled = enabled
        self.slowapi = Limiter(
            key_func=get_remote_address,
            default_limits=[limit],
            strategy="fixed-window",
            enabled=enabled,
        )

    def check(self, request: Request) -> None:
        """Count one request for this client; raises RateLimited when over budget."""
        if not self.enabled:
            return
        client = get_remote_address(request)
        if not self.slowapi.limiter.hit(self.item, "gateway", client):
            raise RateLimited(str(self.item), client=client)


def build_limiter(limit: Optional[str] = None, enabled: Optional[bool] = None) -> RequestLimiter:
    limit   = limit or RATE_LIMIT
    enabled = RATE_LIMIT_ENABLED if enabled is None else enabled
    if enabled:
        log.info(f"Rate limiter: {limit} per client IP (fixed window, in-memory)")
    else:
        log.warning("Rate limiter disabled (RATE_LIMIT_ENABLED=false)")
    return RequestLimiter(limit, enabled)


def install_limiter(app: FastAPI, limiter: RequestLimiter) -> None:
    app.state.limiter = limiter


async def enforce_rate_limit(request: Request) -> None:
    limiter: RequestLimiter = request.app.state.limiter
    limiter.check(request)
