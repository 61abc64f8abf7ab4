"""
Redis caching layer for analysis results.

Results are keyed by a fingerprint of the request (profile + evidence), so
identical submissions share one cached analysis. The analysis itself is
deterministic; the cache only saves recomputation and is never required.

TTL:
  - Full analysis results by fingerprint: settings.cache_ttl_seconds
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Optional

import redis.asyncio as redis

from infrashadows.config import settings
from infrashadows.models.schemas import BuildingProfile, EvidenceRecord

logger = logging.getLogger(__name__)

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis client. Returns None if Redis is not configured."""
    global _redis_client
    if _redis_client is not None:
        return _redis_client

    redis_url = settings.redis_url
    if not redis_url:
        return None

    try:
        _redis_client = redis.from_url(
            redis_url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=3,
            socket_timeout=3,
        )
        await _redis_client.ping()
        return _redis_client
    except Exception as e:
        logger.warning("Redis unavailable at %s: %s", redis_url, e)
        _redis_client = None
        return None


def profile_fingerprint(
    profile: BuildingProfile,
    evidence: Optional[EvidenceRecord] = None,
) -> str:
    """Stable SHA-256 of the analysis inputs."""
    payload = {
        "profile": profile.model_dump(mode="json"),
        "evidence": (evidence or EvidenceRecord()).model_dump(mode="json"),
    }
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(encoded.encode()).hexdigest()


def _make_key(prefix: str, identifier: str) -> str:
    """Build a cache key."""
    return f"infrashadows:{prefix}:{identifier}"


async def cache_get(prefix: str, identifier: str) -> Optional[dict]:
    """Get a cached value. Returns None on miss or Redis unavailable."""
    r = await get_redis()
    if not r:
        return None
    try:
        val = await r.get(_make_key(prefix, identifier))
        if val:
            return json.loads(val)
    except Exception as e:
        logger.warning("Cache read failed for %s:%s: %s", prefix, identifier, e)
    return None


async def cache_set(prefix: str, identifier: str, data: dict, ttl: Optional[int] = None) -> bool:
    """Set a cached value. Returns True on success."""
    r = await get_redis()
    if not r:
        return False
    try:
        await r.setex(
            _make_key(prefix, identifier),
            ttl or settings.cache_ttl_seconds,
            json.dumps(data, default=str),
        )
        return True
    except Exception as e:
        logger.warning("Cache write failed for %s:%s: %s", prefix, identifier, e)
        return False


async def get_cached_analysis(fingerprint: str) -> Optional[dict]:
    return await cache_get("analysis", fingerprint)


async def set_cached_analysis(fingerprint: str, data: dict) -> bool:
    return await cache_set("analysis", fingerprint, data)
