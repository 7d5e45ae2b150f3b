"""Image On Demand - resized assets and placeholder images behind a cache.

This package provides a layered architecture for on-demand images:

Layers:
    - protocols: Interface contracts (CacheStore, AssetRepository, Renderer, FileStore)
    - repositories: Data access and rendering implementations
    - services: Request parsing, cache keys, image resolution
    - handlers: HTTP request/response handling
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from image_on_demand.services import ParameterExtractor, build_cache_key_for

    extractor = ParameterExtractor(step_width=10, step_height=10)
    request = extractor.extract("/image-service/400/300", "text=Hello")
    key = build_cache_key_for(request)
    ```

For HTTP API:
    ```python
    from image_on_demand.api.app import app, create_app
    ```
"""

__version__ = "0.1.0"

from image_on_demand.config import Settings, get_settings
from image_on_demand.entities import NotMyRoute, ResolvedImage, TransformRequest
from image_on_demand.exceptions import ConfigurationError, ImageServiceError
from image_on_demand.handlers import ImageHandler, ResponseBuilder
from image_on_demand.protocols import AssetRepository, CacheStore, FileStore, Renderer
from image_on_demand.repositories import (
    InMemoryCacheRepository,
    JsonAssetRepository,
    LocalFileStore,
    PillowRenderer,
    RedisCacheRepository,
)
from image_on_demand.services import ImageResolver, ParameterExtractor, build_cache_key

__all__ = [
    "__version__",
    # Configuration
    "Settings",
    "get_settings",
    # Protocols (interfaces)
    "AssetRepository",
    "CacheStore",
    "FileStore",
    "Renderer",
    # Services (business logic)
    "ImageResolver",
    "ParameterExtractor",
    "build_cache_key",
    # Handlers (HTTP)
    "ImageHandler",
    "ResponseBuilder",
    # Repositories (data access)
    "InMemoryCacheRepository",
    "JsonAssetRepository",
    "LocalFileStore",
    "PillowRenderer",
    "RedisCacheRepository",
    # Entities (domain models)
    "NotMyRoute",
    "ResolvedImage",
    "TransformRequest",
    # Errors
    "ConfigurationError",
    "ImageServiceError",
]
