"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis -> in-memory, Pillow -> other renderers)
- Unit testing with fake implementations
- Clear separation of concerns
"""

from .asset_repository import AssetRepository
from .cache_store import CacheStore
from .file_store import FileStore
from .renderer import Renderer

__all__ = [
    "AssetRepository",
    "CacheStore",
    "FileStore",
    "Renderer",
]
