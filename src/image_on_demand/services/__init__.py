"""Service layer for business logic.

This layer contains the request parsing, cache key derivation and image
resolution. Services depend on protocols (interfaces), not concrete
implementations, making them testable and flexible.

Architecture:
    Middleware -> Handler -> Service -> Repository
    (HTTP)        (HTTP)     (Business)  (Data Access / Rendering)
"""

from .cache_key import build_cache_key, build_cache_key_for
from .crop_variants import parse_crop_variants, resolve_crop_area
from .image_resolver import NOT_FOUND_TEXT, ImageResolver
from .parameter_extractor import ParameterExtractor, normalize_dimension

__all__ = [
    "ImageResolver",
    "NOT_FOUND_TEXT",
    "ParameterExtractor",
    "build_cache_key",
    "build_cache_key_for",
    "normalize_dimension",
    "parse_crop_variants",
    "resolve_crop_area",
]
