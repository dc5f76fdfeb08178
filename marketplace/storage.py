"""
Storage Module - Durable key-value stores for the cart

Provides:
- KeyValueStore protocol (async get/set over strings)
- Upstash Redis adapter for real deployments
- In-memory adapter for local runs and tests
- get_storage() singleton selected from config
"""

from typing import Dict, Optional, Protocol, runtime_checkable

from upstash_redis.asyncio import Redis as AsyncRedis

from marketplace import config
from marketplace.errors import ERROR_STORAGE_UNAVAILABLE, StorageError
from marketplace.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Opaque asynchronous string store."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> None:
        ...


class RedisKeyValueStore:
    """KeyValueStore backed by Upstash Redis."""

    def __init__(self, client: AsyncRedis, ttl_seconds: int = 0):
        self._client = client
        self._ttl_seconds = ttl_seconds

    async def get(self, key: str) -> Optional[str]:
        try:
            data = await self._client.get(key)
        except Exception as e:
            raise StorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}") from e

        if data is None:
            return None
        if isinstance(data, bytes):
            return data.decode("utf-8")
        return str(data)

    async def set(self, key: str, value: str) -> None:
        try:
            if self._ttl_seconds > 0:
                await self._client.set(key, value, ex=self._ttl_seconds)
            else:
                await self._client.set(key, value)
        except Exception as e:
            raise StorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}") from e


class InMemoryKeyValueStore:
    """Dict-backed KeyValueStore. Lives as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value


# Singleton instance
_storage: Optional[KeyValueStore] = None


def create_redis_storage() -> RedisKeyValueStore:
    """
    Build an Upstash-backed store from the standard env vars:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    if not config.UPSTASH_REDIS_REST_URL or not config.UPSTASH_REDIS_REST_TOKEN:
        raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
    client = AsyncRedis(url=config.UPSTASH_REDIS_REST_URL, token=config.UPSTASH_REDIS_REST_TOKEN)
    return RedisKeyValueStore(client, ttl_seconds=config.CART_TTL_SECONDS)


def get_storage() -> KeyValueStore:
    """Get the configured KeyValueStore (singleton)."""
    global _storage

    if _storage is None:
        backend = config.CART_STORAGE_BACKEND
        if backend == "redis":
            _storage = create_redis_storage()
        elif backend == "memory":
            _storage = InMemoryKeyValueStore()
        else:
            raise ValueError(f"Unknown CART_STORAGE_BACKEND: {backend!r} (expected 'redis' or 'memory')")
        logger.info("Cart storage backend: %s", backend)

    return _storage


def reset_storage() -> None:
    """Drop the storage singleton (used by tests)."""
    global _storage
    _storage = None
