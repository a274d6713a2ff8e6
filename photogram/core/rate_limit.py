from functools import lru_cache

from fastapi import HTTPException, status
from redis import Redis

from photogram.core.config import settings


@lru_cache(maxsize=1)
def get_redis() -> Redis:
    return Redis.from_url(settings.redis_url, decode_responses=True)


def enforce_rate_limit(redis: Redis, *, key: str, limit: int, ttl_seconds: int, detail: str) -> None:
    """Fixed-window counter: the first hit in a window starts its TTL."""
    count = redis.incr(key)
    if count == 1:
        redis.expire(key, ttl_seconds)
    if count > limit:
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=detail)
