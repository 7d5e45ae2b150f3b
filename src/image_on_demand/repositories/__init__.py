"""Repository layer for data access and rendering.

This layer hides external dependencies (Redis, the filesystem, Pillow)
behind protocol-based interfaces. This enables:
- Easy swapping of implementations (Redis -> in-memory, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from image_on_demand.protocols import AssetRepository, CacheStore, FileStore, Renderer

from .json_asset_repository import JsonAssetRepository
from .local_file_store import LocalFileStore
from .memory_repository import InMemoryCacheRepository
from .pillow_renderer import PillowRenderer, compute_font_size
from .redis_repository import RedisCacheRepository

__all__ = [
    "AssetRepository",
    "CacheStore",
    "FileStore",
    "Renderer",
    "InMemoryCacheRepository",
    "JsonAssetRepository",
    "LocalFileStore",
    "PillowRenderer",
    "RedisCacheRepository",
    "compute_font_size",
]
