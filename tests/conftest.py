"""Shared fixtures for the image service tests."""

from pathlib import Path

import pytest
from PIL import Image

from image_on_demand.config import Settings
from image_on_demand.repositories import (
    InMemoryCacheRepository,
    JsonAssetRepository,
    LocalFileStore,
    PillowRenderer,
)

ASSET_UID = 7
RED = (255, 0, 0)
BLUE = (0, 0, 255)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a temporary images directory."""
    return Settings(
        image_step_width=10,
        image_step_height=10,
        images_dir=str(tmp_path / "images"),
        font_path="",
        asset_manifest="",
        cache_backend="memory",
        cache_ttl=0,
    )


@pytest.fixture
def cache_store() -> InMemoryCacheRepository:
    return InMemoryCacheRepository()


@pytest.fixture
def renderer(settings: Settings) -> PillowRenderer:
    return PillowRenderer.create(settings)


@pytest.fixture
def file_store() -> LocalFileStore:
    return LocalFileStore()


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    """Directory with an 800x600 JPEG: left half red, right half blue."""
    directory = tmp_path / "assets"
    directory.mkdir()

    image = Image.new("RGB", (800, 600), BLUE)
    image.paste(RED, (0, 0, 400, 600))
    image.save(directory / "photo.jpg", format="JPEG", quality=95)

    (directory / "broken.jpg").write_bytes(b"not an image")
    return directory


@pytest.fixture
def manifest_entries() -> dict:
    return {
        str(ASSET_UID): {
            "path": "photo.jpg",
            "crop": {
                "default": {"cropArea": {"x": 0, "y": 0, "width": 0.5, "height": 1}},
                "full": {"cropArea": {"x": 0, "y": 0, "width": 0, "height": 0}},
            },
        },
        "8": {"path": "photo.jpg", "crop": "{not json"},
        "9": {"path": "broken.jpg"},
    }


@pytest.fixture
def asset_repository(asset_dir: Path, manifest_entries: dict) -> JsonAssetRepository:
    return JsonAssetRepository(entries=manifest_entries, base_dir=asset_dir)


@pytest.fixture
def oversized_asset_repository(asset_dir: Path, monkeypatch) -> JsonAssetRepository:
    """Repository whose asset 5 exceeds Pillow's decompression bomb limit.

    The limit is lowered to 10,000 pixels; a 300x300 image is more than
    twice that, so Pillow refuses to open it.
    """
    Image.new("RGB", (300, 300), RED).save(asset_dir / "oversized.png", format="PNG")
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10_000)
    return JsonAssetRepository(entries={"5": {"path": "oversized.png"}}, base_dir=asset_dir)
