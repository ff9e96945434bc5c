# ecofootprint/cache.py — best-effort result cache on Redis
from __future__ import annotations
import json
import logging
from typing import Optional, Type, TypeVar

import redis
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from .config import CACHE_PREFIX, CACHE_TTL, REDIS_SOCKET_TIMEOUT
from .errors import CacheUnavailable
from .schemas import dump

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def cache_key(url: str) -> str:
    """Key for a scraped URL. The URL is used exactly as received."""
    return f"{CACHE_PREFIX}{url}"


class ResultCache:
    """
    Wraps a Redis-like client (``ping``, ``get``, ``setex``).

    The cache never fails a request: when the store is down, ``get`` is a
    miss and ``set`` does nothing.
    """

    def __init__(self, client, ttl: int = CACHE_TTL):
        self.client = client
        self.ttl = ttl

    @property
    def connected(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError:
            return False

    def _require_connection(self) -> None:
        if not self.connected:
            raise CacheUnavailable("result cache is not reachable")

    def get(self, key: str, model: Type[M]) -> Optional[M]:
        try:
            self._require_connection()
            raw = self.client.get(key)
        except (CacheUnavailable, redis.RedisError) as e:
            logger.warning("[cache] get %s bypassed: %s", key, e)
            return None
        if raw is None:
            return None
        try:
            return model.model_validate_json(raw)
        except SchemaError as e:
            logger.warning("[cache] unreadable entry for %s, ignoring: %s", key, e)
            return None

    def set(self, key: str, result: BaseModel) -> None:
        try:
            self._require_connection()
            self.client.setex(key, self.ttl, _to_json(result))
        except (CacheUnavailable, redis.RedisError) as e:
            logger.warning("[cache] set %s skipped: %s", key, e)


def _to_json(result: BaseModel) -> str:
    return json.dumps(dump(result), ensure_ascii=False)


def connect_cache(url: Optional[str]) -> Optional[ResultCache]:
    """Build the cache from a redis:// URL; empty URL means no cache."""
    if not url:
        logger.info("[cache] REDIS_URL empty, result cache disabled")
        return None
    client = redis.Redis.from_url(
        url,
        socket_timeout=REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=REDIS_SOCKET_TIMEOUT,
        decode_responses=True,
    )
    return ResultCache(client)
