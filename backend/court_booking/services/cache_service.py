"""
Redis caching service for court availability.

CACHING STRATEGY
================

What we cache:
  - The slot list for one court on one date (JSON-serialized)
  - Cache key pattern: "availability:court={court_id}:date={YYYY-MM-DD}"

Why:
  - Availability grids are the most frequent read (clients poll them while
    choosing a time)
  - Building one needs a court lookup plus a bookings scan

Invalidation strategy:
  - Any booking mutation deletes the key for the affected court/date
  - Moving a booking to another date invalidates both dates
  - Routes invalidate only after the transaction has committed, otherwise a
    concurrent read could re-cache the pre-commit state
  - Short TTL as safety net (REDIS_CACHE_TTL)

The cache is advisory: the conflict check always reads the database, so a
stale grid can mislead a client but never produce a double booking.
"""

import json
from datetime import date
from typing import Optional

from redis.exceptions import RedisError

from court_booking.core.config import get_settings
from court_booking.core.logging import get_logger
from court_booking.core.metrics import record_cache_operation
from court_booking.infrastructure.redis_client import get_redis

logger = get_logger(__name__)
settings = get_settings()


def _make_availability_key(court_id: int, slot_date: date) -> str:
    return f"availability:court={court_id}:date={slot_date.isoformat()}"


async def get_cached_availability(court_id: int, slot_date: date) -> Optional[list[dict]]:
    client = await get_redis()
    if not client:
        return None

    key = _make_availability_key(court_id, slot_date)
    try:
        data = await client.get(key)
    except RedisError as e:
        record_cache_operation("get", "error")
        logger.error("cache_get_error", key=key, error=str(e))
        return None

    if data:
        record_cache_operation("get", "hit")
        logger.debug("cache_hit", key=key)
        return json.loads(data)

    record_cache_operation("get", "miss")
    logger.debug("cache_miss", key=key)
    return None


async def set_cached_availability(court_id: int, slot_date: date, slots: list[dict]) -> None:
    client = await get_redis()
    if not client:
        return

    key = _make_availability_key(court_id, slot_date)
    try:
        await client.setex(key, settings.REDIS_CACHE_TTL, json.dumps(slots, default=str))
        record_cache_operation("set", "ok")
        logger.debug("cache_set", key=key, ttl=settings.REDIS_CACHE_TTL)
    except RedisError as e:
        record_cache_operation("set", "error")
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_availability(court_id: int, *dates: date) -> None:
    client = await get_redis()
    if not client:
        return

    keys = [_make_availability_key(court_id, d) for d in set(dates)]
    try:
        deleted = await client.delete(*keys)
        record_cache_operation("invalidate", "ok")
        logger.info("cache_invalidated", court_id=court_id, keys_deleted=deleted)
    except RedisError as e:
        record_cache_operation("invalidate", "error")
        logger.error("cache_invalidation_error", court_id=court_id, error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        total = hits + misses
        return {
            "status": "connected",
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / total * 100, 2) if total else 0.0,
        }
    except RedisError as e:
        logger.error("cache_stats_error", error=str(e))
        return {"status": "error", "error": str(e)}
