"""
Redis caching for the flight seat summary listing.

What we cache:
  - Paginated responses of GET /flights/
  - Key pattern: "flights:list:page={page}&size={size}&available={available_only}"

Invalidation:
  - After every committed book / cancel / delete, all listing keys are dropped
    (each of them may show a seat count that just changed)
  - TTL as a safety net

What we never cache:
  - Per-flight seat audits and anything on the booking path. Those read the
    database directly; the ledger is the only source of truth for seat counts.

Redis is optional: when disabled or unreachable every call degrades to a miss.
"""

import json
from typing import Optional

import redis.asyncio as redis
from flight_booking.core.config import get_settings
from flight_booking.core.logging import get_logger
from flight_booking.core.metrics import record_cache_operation

logger = get_logger(__name__)
settings = get_settings()

FLIGHT_LIST_PREFIX = "flights:list:"

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled or down."""
    global _redis_client

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        client = redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
        )
        try:
            await client.ping()
        except redis.RedisError as e:
            logger.error("redis_connection_failed", error=str(e))
            await client.aclose()
            return None
        _redis_client = client
        logger.info("redis_connected", url=settings.REDIS_URL)

    return _redis_client


async def close_redis() -> None:
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


def _make_flight_list_key(page: int, page_size: int, available_only: bool) -> str:
    return f"{FLIGHT_LIST_PREFIX}page={page}&size={page_size}&available={available_only}"


async def get_cached_flights(page: int, page_size: int, available_only: bool) -> Optional[dict]:
    client = await get_redis()
    if not client:
        return None

    key = _make_flight_list_key(page, page_size, available_only)
    try:
        data = await client.get(key)
    except redis.RedisError as e:
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


async def set_cached_flights(page: int, page_size: int, available_only: bool, data: dict) -> None:
    client = await get_redis()
    if not client:
        return

    key = _make_flight_list_key(page, page_size, available_only)
    try:
        await client.setex(key, settings.FLIGHT_LIST_CACHE_TTL, json.dumps(data, default=str))
        record_cache_operation("set", "ok")
    except redis.RedisError as e:
        record_cache_operation("set", "error")
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_flight_cache() -> None:
    """Drop every cached flight listing page."""
    client = await get_redis()
    if not client:
        return

    try:
        deleted = 0
        async for key in client.scan_iter(match=f"{FLIGHT_LIST_PREFIX}*", count=100):
            await client.delete(key)
            deleted += 1
        record_cache_operation("invalidate", "ok")
        logger.info("cache_invalidated", keys_deleted=deleted)
    except redis.RedisError as e:
        record_cache_operation("invalidate", "error")
        logger.error("cache_invalidation_error", error=str(e))


async def get_cache_stats() -> dict:
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
    except redis.RedisError as e:
        return {"status": "error", "error": str(e)}

    hits = info.get("keyspace_hits", 0)
    misses = info.get("keyspace_misses", 0)
    return {
        "status": "connected",
        "hits": hits,
        "misses": misses,
        "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
    }
