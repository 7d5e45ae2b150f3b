"""
Tests for the image resolution state machine.
"""

from pathlib import Path
from unittest.mock import Mock

import pytest
from PIL import Image

from image_on_demand.entities import ResolvedImage
from image_on_demand.exceptions import ConfigurationError, RenderError
from image_on_demand.repositories import InMemoryCacheRepository, LocalFileStore
from image_on_demand.services import NOT_FOUND_TEXT, ImageResolver, ParameterExtractor, build_cache_key_for


class FailingCacheStore(InMemoryCacheRepository):
    """Cache store whose writes always fail."""

    def set(self, key: str, path: str) -> None:
        raise ConnectionError("cache backend unavailable")


class VanishingFileStore(LocalFileStore):
    """File store whose files are deleted between exists() and describe()."""

    def __init__(self) -> None:
        self._checked: set[str] = set()

    def exists(self, path: str) -> bool:
        self._checked.add(path)
        return super().exists(path)

    def describe(self, path: str) -> ResolvedImage:
        if path in self._checked:
            Path(path).unlink()
        return super().describe(path)


@pytest.fixture
def extractor():
    return ParameterExtractor(step_width=10, step_height=10, allowed_extensions=("png", "jpg", "webp"))


@pytest.fixture
def spy_renderer(renderer):
    """The real renderer, wrapped so calls can be counted."""
    return Mock(wraps=renderer)


@pytest.fixture
def resolver(cache_store, asset_repository, spy_renderer, file_store):
    return ImageResolver(
        cache_store=cache_store,
        asset_repository=asset_repository,
        renderer=spy_renderer,
        file_store=file_store,
    )


def _resolve(resolver, extractor, path, query=""):
    request = extractor.extract(path, query)
    key = build_cache_key_for(request)
    return request, key, resolver.resolve(request, key)


def test_placeholder_scenario(resolver, extractor, spy_renderer, cache_store):
    query = "text=Hello&bgColor=ff0000&textColor=ffffff"
    request, key, resolved = _resolve(resolver, extractor, "/image-service/400/300", query)

    spy_renderer.draw_placeholder.assert_called_once_with(400, 300, "ff0000", "ffffff", "Hello")
    spy_renderer.apply_transform.assert_not_called()
    assert cache_store.get(key) == resolved.path
    assert resolved.mime_type == "image/png"
    assert resolved.size == Path(resolved.path).stat().st_size

    with Image.open(resolved.path) as image:
        assert image.size == (400, 300)
        assert image.convert("RGB").getpixel((0, 0)) == (255, 0, 0)


def test_id_zero_is_placeholder(resolver, extractor, spy_renderer):
    _resolve(resolver, extractor, "/image-service/400/400", "id=0")
    spy_renderer.draw_placeholder.assert_called_once_with(400, 400, "000000", "ffffff", "Dummy Image")
    spy_renderer.apply_transform.assert_not_called()


def test_second_resolution_is_served_from_cache(resolver, extractor, spy_renderer):
    _, _, first = _resolve(resolver, extractor, "/image-service/400/300", "text=Hello")
    _, _, second = _resolve(resolver, extractor, "/image-service/400/300", "text=Hello")

    assert spy_renderer.draw_placeholder.call_count == 1
    assert second == first
    assert Path(second.path).read_bytes() == Path(first.path).read_bytes()


def test_different_query_is_a_different_entry(resolver, extractor, spy_renderer, cache_store):
    _resolve(resolver, extractor, "/image-service/400/300", "text=Hello")
    _resolve(resolver, extractor, "/image-service/400/300", "text=World")

    assert spy_renderer.draw_placeholder.call_count == 2
    assert len(cache_store) == 2


def test_cached_path_without_file_is_a_miss(resolver, extractor, spy_renderer, cache_store):
    request = extractor.extract("/image-service/400/300", "text=Hello")
    key = build_cache_key_for(request)
    cache_store.set(key, "/nonexistent/image.png")

    resolved = resolver.resolve(request, key)

    spy_renderer.draw_placeholder.assert_called_once()
    assert Path(resolved.path).exists()
    assert cache_store.get(key) == resolved.path


def test_file_deleted_during_lookup_is_a_miss(cache_store, asset_repository, spy_renderer, extractor):
    resolver = ImageResolver(cache_store, asset_repository, spy_renderer, VanishingFileStore())
    request, key, first = _resolve(resolver, extractor, "/image-service/400/300", "text=Hello")

    second = resolver.resolve(request, key)

    assert spy_renderer.draw_placeholder.call_count == 2
    assert second.path != first.path
    assert cache_store.get(key) == second.path


def test_real_asset_is_transformed(resolver, extractor, spy_renderer):
    _, _, resolved = _resolve(resolver, extractor, "/image-service/200/300", "id=7")

    spy_renderer.apply_transform.assert_called_once()
    spy_renderer.draw_placeholder.assert_not_called()
    asset, instructions = spy_renderer.apply_transform.call_args.args
    assert asset.uid == 7
    assert (instructions.width, instructions.height) == (200, 300)
    assert instructions.crop.as_box() == (0, 0, 400, 600)
    assert resolved.mime_type == "image/jpeg"

    with Image.open(resolved.path) as image:
        assert image.size == (200, 300)
        red, green, blue = image.convert("RGB").getpixel((100, 150))
        assert red > 200 and blue < 60


def test_empty_crop_variant_passes_no_crop(resolver, extractor, spy_renderer):
    _resolve(resolver, extractor, "/image-service/200/200", "id=7&crop=full")

    instructions = spy_renderer.apply_transform.call_args.args[1]
    assert instructions.crop is None


def test_requested_extension_is_passed_through(resolver, extractor, spy_renderer):
    _, _, resolved = _resolve(resolver, extractor, "/image-service/200/200", "id=7&fileExt=png")

    assert spy_renderer.apply_transform.call_args.args[1].file_extension == "png"
    assert resolved.mime_type == "image/png"


@pytest.mark.parametrize(
    "query",
    [
        "id=999",  # unknown asset
        "id=9",  # undecodable file
        "id=8",  # malformed crop configuration
    ],
)
def test_asset_failures_fall_back_to_not_found_placeholder(resolver, extractor, spy_renderer, cache_store, query):
    request, key, resolved = _resolve(resolver, extractor, "/image-service/300/200", f"{query}&bgColor=00ff00")

    spy_renderer.draw_placeholder.assert_called_once_with(300, 200, "00ff00", "ffffff", NOT_FOUND_TEXT)
    assert cache_store.get(key) == resolved.path

    with Image.open(resolved.path) as image:
        assert image.size == (300, 200)


def test_oversized_asset_falls_back_to_placeholder(
    cache_store, oversized_asset_repository, spy_renderer, file_store, extractor
):
    resolver = ImageResolver(cache_store, oversized_asset_repository, spy_renderer, file_store)

    _, key, resolved = _resolve(resolver, extractor, "/image-service/100/100", "id=5")

    spy_renderer.draw_placeholder.assert_called_once_with(100, 100, "000000", "ffffff", NOT_FOUND_TEXT)
    spy_renderer.apply_transform.assert_not_called()
    assert resolved.mime_type == "image/png"
    assert cache_store.get(key) == resolved.path


def test_render_error_falls_back_to_placeholder(cache_store, asset_repository, renderer, file_store, extractor):
    failing = Mock(wraps=renderer)
    failing.apply_transform.side_effect = RenderError("decoder exploded")
    resolver = ImageResolver(cache_store, asset_repository, failing, file_store)

    _, _, resolved = _resolve(resolver, extractor, "/image-service/400/400", "id=7")

    failing.draw_placeholder.assert_called_once_with(400, 400, "000000", "ffffff", NOT_FOUND_TEXT)
    assert Path(resolved.path).exists()


def test_cache_write_failure_is_not_fatal(asset_repository, spy_renderer, file_store, extractor):
    resolver = ImageResolver(FailingCacheStore(), asset_repository, spy_renderer, file_store)

    _, _, resolved = _resolve(resolver, extractor, "/image-service/400/400", "text=Hello")

    assert Path(resolved.path).exists()


def test_configuration_error_propagates(cache_store, asset_repository, renderer, file_store, extractor):
    broken = Mock(wraps=renderer)
    broken.draw_placeholder.side_effect = ConfigurationError("font missing")
    resolver = ImageResolver(cache_store, asset_repository, broken, file_store)

    with pytest.raises(ConfigurationError):
        _resolve(resolver, extractor, "/image-service/400/400", "")
    assert len(cache_store) == 0


def test_render_placeholder_skips_cache(resolver, extractor, cache_store):
    request = extractor.extract_dummy("/dummyimage/320/240/ff0000/ffffff")
    resolved = resolver.render_placeholder(request)

    assert len(cache_store) == 0
    with Image.open(resolved.path) as image:
        assert image.size == (320, 240)
