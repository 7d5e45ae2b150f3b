"""Cache storage protocol.

Defines the interface for the key -> image path store that lets the
resolver skip rendering for requests it has already answered.

Implementations can include:
- Redis (default)
- In-process dictionary (single worker, tests)
- Any other store with atomic get/set
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache storage backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed. Implementations must tolerate concurrent
    get/set calls from several requests; expiry is their own business.

    Example:
        ```python
        from image_on_demand.protocols import CacheStore

        store: CacheStore = RedisCacheRepository.create()
        store: CacheStore = InMemoryCacheRepository()
        ```
    """

    def get(self, key: str) -> str | None:
        """Look up the image path stored under a key.

        Args:
            key: The cache key

        Returns:
            The stored file path, or None on a miss
        """
        ...

    def set(self, key: str, path: str) -> None:
        """Store an image path under a key (last write wins).

        Args:
            key: The cache key
            path: Path of the resolved image file
        """
        ...

    def health_check(self) -> bool:
        """Check if the store is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...

    def get_stats(self) -> dict:
        """Get store statistics.

        Returns:
            Dictionary with stats (implementation-specific)
        """
        ...
