"""Image resolution service.

Resolves a normalized TransformRequest to an image file, in this order:

1. Cache lookup (a hit whose file has vanished counts as a miss)
2. Real asset transform when an ``id`` was requested
3. Placeholder synthesis, also used as fallback when the asset cannot
   be loaded, cropped or rendered ("Image not found!")
4. Best-effort cache store

Two concurrent misses for the same key both render and both write the
cache; the last write wins. Only ConfigurationError escapes resolve().
"""

import logging

from image_on_demand.entities import AssetFailure, ResolvedImage, TransformInstructions, TransformRequest
from image_on_demand.exceptions import CropResolutionError, RenderError
from image_on_demand.protocols import AssetRepository, CacheStore, FileStore, Renderer
from image_on_demand.services.crop_variants import resolve_crop_area

logger = logging.getLogger(__name__)

NOT_FOUND_TEXT = "Image not found!"


class ImageResolver:
    """Orchestrates cache, asset repository and renderer.

    This service depends on PROTOCOLS, not concrete implementations:
    - CacheStore: Redis, in-memory, ...
    - AssetRepository: JSON manifest, database, ...
    - Renderer: Pillow, ...
    - FileStore: local disk, ...

    Example:
        ```python
        resolver = ImageResolver(
            cache_store=InMemoryCacheRepository(),
            asset_repository=JsonAssetRepository.create(),
            renderer=PillowRenderer.create(),
            file_store=LocalFileStore(),
        )
        image = resolver.resolve(request, build_cache_key_for(request))
        ```
    """

    def __init__(
        self,
        cache_store: CacheStore,
        asset_repository: AssetRepository,
        renderer: Renderer,
        file_store: FileStore,
    ) -> None:
        self._cache = cache_store
        self._assets = asset_repository
        self._renderer = renderer
        self._files = file_store

    def resolve(self, request: TransformRequest, cache_key: str) -> ResolvedImage:
        """Return the image for a request, rendering it on a cache miss.

        Args:
            request: The normalized request
            cache_key: Key derived from the request

        Returns:
            The resolved image (cached, transformed asset or placeholder)

        Raises:
            ConfigurationError: If rendering is impossible due to misconfiguration
        """
        cached = self._lookup(cache_key)
        if cached is not None:
            return cached

        if request.wants_asset:
            outcome = self._load_asset(request)
            if isinstance(outcome, AssetFailure):
                logger.warning(
                    "Falling back to placeholder for asset %s: %s",
                    outcome.file_reference_id,
                    outcome.reason,
                )
                path = self.synthesize(request, text=NOT_FOUND_TEXT)
            else:
                path = outcome
        else:
            path = self.synthesize(request)

        self._store(cache_key, path)
        return self._files.describe(path)

    def synthesize(self, request: TransformRequest, text: str | None = None) -> str:
        """Draw a placeholder for the request and return its path.

        Args:
            request: Supplies size and colors
            text: Overrides the request text
        """
        return self._renderer.draw_placeholder(
            request.width,
            request.height,
            request.background_color,
            request.font_color,
            text or request.text,
        )

    def render_placeholder(self, request: TransformRequest) -> ResolvedImage:
        """Draw a placeholder without touching the cache."""
        return self._files.describe(self.synthesize(request))

    def _lookup(self, cache_key: str) -> ResolvedImage | None:
        try:
            path = self._cache.get(cache_key)
        except Exception as e:
            logger.warning("Cache lookup for %s failed: %s", cache_key, e)
            return None

        if path is None:
            logger.debug("Cache miss: %s", cache_key)
            return None

        if not self._files.exists(path):
            logger.warning("Cached file for %s is missing: %s", cache_key, path)
            return None

        try:
            resolved = self._files.describe(path)
        except OSError as e:
            logger.warning("Cached file for %s vanished: %s", cache_key, e)
            return None

        logger.debug("Cache hit: %s -> %s", cache_key, path)
        return resolved

    def _load_asset(self, request: TransformRequest) -> str | AssetFailure:
        uid = request.file_reference_id
        asset = self._assets.find_by_uid(uid)
        if asset is None:
            return AssetFailure(file_reference_id=uid, reason="asset not found")

        try:
            area = resolve_crop_area(asset.crop, request.crop_variant)
            crop = None if area.is_empty else area.make_absolute(asset.width, asset.height)
            return self._renderer.apply_transform(
                asset,
                TransformInstructions(
                    width=request.width,
                    height=request.height,
                    crop=crop,
                    file_extension=request.file_extension,
                ),
            )
        except (CropResolutionError, RenderError) as e:
            return AssetFailure(file_reference_id=uid, reason=str(e))

    def _store(self, cache_key: str, path: str) -> None:
        try:
            self._cache.set(cache_key, path)
        except Exception as e:
            logger.warning("Failed to cache %s: %s", cache_key, e)
