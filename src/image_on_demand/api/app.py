from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from image_on_demand import __version__
from image_on_demand.api.dependencies import get_cache_store, get_settings_from_app, lifespan
from image_on_demand.api.middleware import DummyImageMiddleware, ImageOnDemandMiddleware
from image_on_demand.config import Settings, get_settings
from image_on_demand.dto import HealthCheckResponse
from image_on_demand.protocols import AssetRepository, CacheStore, Renderer


def create_app(
    settings: Settings | None = None,
    cache_store: CacheStore | None = None,
    asset_repository: AssetRepository | None = None,
    renderer: Renderer | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Settings to use. If None, loads them from the environment.
        cache_store: Cache store override. If None, built from CACHE_BACKEND.
        asset_repository: Asset repository override. If None, loaded from ASSET_MANIFEST.
        renderer: Renderer override. If None, a PillowRenderer is used.

    Returns:
        The configured application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Image On Demand Service",
        description="Serves resized assets and generated placeholder images with caching",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    if cache_store is not None:
        app.state.cache_store = cache_store
    if asset_repository is not None:
        app.state.asset_repository = asset_repository
    if renderer is not None:
        app.state.renderer = renderer

    # Last added runs outermost
    app.add_middleware(DummyImageMiddleware)  # type: ignore[arg-type]
    app.add_middleware(ImageOnDemandMiddleware)  # type: ignore[arg-type]
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_methods=["GET", "HEAD"],
        allow_headers=["*"],
    )

    app.mount(
        settings.public_url_prefix.rstrip("/"),
        StaticFiles(directory=settings.images_dir, check_dir=False),
        name="images",
    )

    @app.get("/")
    async def root(request: Request) -> dict[str, Any]:
        """Root endpoint with API information."""
        current = get_settings_from_app(request.app)
        return {
            "name": "Image On Demand Service",
            "version": __version__,
            "endpoints": {
                "images": f"{current.base_path}{{width}}/{{height}}",
                "dummy_images": f"{current.dummy_base_path}{{width}}/{{height}}/{{bgColor}}/{{textColor}}",
                "files": current.public_url_prefix,
                "health": "/health",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(request: Request) -> Any:
        """Health check endpoint."""
        store = get_cache_store(request)
        healthy = store.health_check()
        body = HealthCheckResponse(
            status="healthy" if healthy else "unhealthy",
            cache_healthy=healthy,
            cache_backend=get_settings_from_app(request.app).cache_backend,
        )
        if not healthy:
            return JSONResponse(body.model_dump(), status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
        return body

    return app


app = create_app()
