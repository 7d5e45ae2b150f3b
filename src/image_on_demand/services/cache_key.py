"""Deterministic cache keys for resolved images."""

import hashlib

from image_on_demand.entities import TransformRequest

CACHE_KEY_PREFIX = "image_cache"


def build_cache_key(width: int, height: int, query_string: str) -> str:
    """Build the cache key ``image_cache_{width}_{height}_{sha256(query)}``.

    The dimensions stay readable in the key; the query string carries
    id, crop, colors and text and is hashed to bound the key length.
    """
    digest = hashlib.sha256(query_string.encode("utf-8")).hexdigest()
    return f"{CACHE_KEY_PREFIX}_{width}_{height}_{digest}"


def build_cache_key_for(request: TransformRequest) -> str:
    """Build the cache key of a normalized request."""
    return build_cache_key(request.width, request.height, request.query_string)
