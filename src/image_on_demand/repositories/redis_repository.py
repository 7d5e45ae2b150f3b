"""Redis implementation of CacheStore.

Each cache entry is a plain string key holding the image path. Redis
GET/SET are atomic, so concurrent requests need no extra locking.
It's the default implementation and satisfies the CacheStore protocol.
"""

import redis

from image_on_demand.config import Settings, get_redis_client, get_settings


class RedisCacheRepository:
    """Redis implementation using namespaced string keys.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Entries are written as ``{prefix}:{cache_key}`` with an optional TTL.
    Eviction is left entirely to Redis.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
        ttl: int | None = None,
    ) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: Redis client instance. If None, creates default.
            prefix: Namespace prepended to every key.
            ttl: Time-to-live for entries in seconds, 0 for no expiry.
        """
        self._client = redis_client if redis_client is not None else get_redis_client()
        self._prefix = prefix if prefix is not None else get_settings().cache_prefix
        self._ttl = ttl if ttl is not None else get_settings().cache_ttl

    @classmethod
    def create(cls, settings: Settings | None = None) -> "RedisCacheRepository":
        """Factory method to create RedisCacheRepository from settings.

        Args:
            settings: Settings to read the URL, prefix and TTL from. If None, uses defaults.

        Returns:
            Configured RedisCacheRepository
        """
        settings = settings or get_settings()
        return cls(
            redis_client=get_redis_client(settings),
            prefix=settings.cache_prefix,
            ttl=settings.cache_ttl,
        )

    def _namespaced(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    def get(self, key: str) -> str | None:
        """Look up the image path stored under a key.

        Args:
            key: The cache key

        Returns:
            The stored path, or None on a miss
        """
        value = self._client.get(self._namespaced(key))
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode()
        return str(value)

    def set(self, key: str, path: str) -> None:
        """Store an image path under a key.

        Args:
            key: The cache key
            path: Path of the resolved image file
        """
        self._client.set(self._namespaced(key), path, ex=self._ttl or None)

    def count_all(self) -> int:
        """Count entries in this namespace.

        Returns:
            Total number of cached entries
        """
        count = 0
        for _ in self._client.scan_iter(match=f"{self._prefix}:*"):
            count += 1
        return count

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    def get_stats(self) -> dict:
        """Get repository statistics.

        Returns:
            Dictionary with stats
        """
        return {
            "backend": "redis",
            "prefix": self._prefix,
            "total_entries": self.count_all(),
            "ttl": self._ttl,
        }

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
