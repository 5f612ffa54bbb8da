"""
gateway/core/sweeper.py
═══════════════════════════════════════════════════════════════════════════════
Optional background sweep of expired cache entries.

Reads already treat expired entries as absent, so this only reclaims memory
held by keys nobody asks for again.

  1. ONE sweeper per store (guarded by _running)
  2. Interval = CACHE_SWEEP_INTERVAL_S; 0 disables it entirely
  3. A failed sweep is logged and the loop carries on
═══════════════════════════════════════════════════════════════════════════════
"""

import asyncio
import logging

from gateway.core.cache import CacheStore

log = logging.getLogger("sweeper")

_running: set[int] = set()


def sweep_once(store: CacheStore) -> int:
    removed = store.purge_expired()
    if removed:
        log.info(f"Swept {removed} expired entries ({len(store)} left)")
    return removed


async def run_sweeper(store: CacheStore, interval_s: float) -> None:
    """
    Started once from the app lifespan, runs until cancelled.
    A second start for the same store is ignored.
    """
    if interval_s <= 0:
        log.info("Cache sweeper disabled")
        return
    if id(store) in _running:
        log.warning("Sweeper already running for this store — ignoring duplicate start")
        return

    _running.add(id(store))
    log.info(f"Sweeper started (every {interval_s}s)")
    try:
        while True:
            await asyncio.sleep(interval_s)
            try:
                sweep_once(store)
            except Exception as ex:
                log.error(f"Sweep error (continuing): {ex}")
    finally:
        _running.discard(id(store))
        log.info("Sweeper stopped")
