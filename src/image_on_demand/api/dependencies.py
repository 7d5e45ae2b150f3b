"""Dependency wiring for the FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - create_app() may pre-seed app.state with settings and collaborators
    - lifespan builds whatever is missing and stores the handler
    - middlewares and routes retrieve instances from request.app.state
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request

from image_on_demand.config import Settings, configure_logging, get_settings
from image_on_demand.exceptions import ConfigurationError
from image_on_demand.handlers import ImageHandler, ResponseBuilder
from image_on_demand.protocols import AssetRepository, CacheStore, Renderer
from image_on_demand.repositories import (
    InMemoryCacheRepository,
    JsonAssetRepository,
    LocalFileStore,
    PillowRenderer,
    RedisCacheRepository,
)
from image_on_demand.services import ImageResolver, ParameterExtractor

logger = logging.getLogger(__name__)


def create_cache_store(settings: Settings) -> CacheStore:
    """Create the cache store selected by CACHE_BACKEND."""
    if settings.cache_backend == "memory":
        return InMemoryCacheRepository(ttl=settings.cache_ttl)
    return RedisCacheRepository.create(settings)


def build_image_handler(
    settings: Settings,
    cache_store: CacheStore,
    asset_repository: AssetRepository | None = None,
    renderer: Renderer | None = None,
) -> ImageHandler:
    """Assemble extractor, resolver and response builder into a handler.

    Raises:
        ConfigurationError: If the settings are unusable
    """
    # Injected collaborators may be empty (falsy); only None means "build one"
    if asset_repository is None:
        asset_repository = JsonAssetRepository.create(settings)
    if renderer is None:
        renderer = PillowRenderer.create(settings)

    resolver = ImageResolver(
        cache_store=cache_store,
        asset_repository=asset_repository,
        renderer=renderer,
        file_store=LocalFileStore(),
    )
    return ImageHandler(
        extractor=ParameterExtractor.create(settings),
        resolver=resolver,
        responses=ResponseBuilder(settings.images_dir, settings.public_url_prefix),
    )


def get_settings_from_app(app: FastAPI) -> Settings:
    return getattr(app.state, "settings", None) or get_settings()


def get_image_handler(request: Request) -> ImageHandler:
    """Retrieve the ImageHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "image_handler", None)
    if handler is None:
        raise RuntimeError("ImageHandler not initialized. Check lifespan setup.")
    return handler


def get_cache_store(request: Request) -> CacheStore:
    """Retrieve the CacheStore from app.state.

    Raises:
        RuntimeError: If the store is not initialized
    """
    store = getattr(request.app.state, "cache_store", None)
    if store is None:
        raise RuntimeError("CacheStore not initialized. Check lifespan setup.")
    return store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Cache store (Redis or in-memory) - app.state.cache_store
    2. Images directory - created up front so misconfiguration fails at startup
    3. Handler (extractor + resolver + responses) - app.state.image_handler

    Collaborators already present on app.state (set by create_app) are
    used as-is.
    """
    settings = get_settings_from_app(app)
    configure_logging(settings.log_level)

    try:
        Path(settings.images_dir).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(f"Cannot create images directory {settings.images_dir}: {e}") from e

    cache_store = getattr(app.state, "cache_store", None)
    if cache_store is None:
        cache_store = create_cache_store(settings)
    app.state.cache_store = cache_store
    app.state.image_handler = build_image_handler(
        settings,
        cache_store=cache_store,
        asset_repository=getattr(app.state, "asset_repository", None),
        renderer=getattr(app.state, "renderer", None),
    )

    logger.info("Image service initialized")
    logger.info("Base path: %s, dummy path: %s", settings.base_path, settings.dummy_base_path)
    logger.info("Step size: %dx%d", settings.image_step_width, settings.image_step_height)
    logger.info("Cache backend: %s, healthy: %s", settings.cache_backend, cache_store.health_check())

    yield

    del app.state.image_handler
    logger.info("Image service shut down")
