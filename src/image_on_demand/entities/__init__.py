"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services,
repositories and handlers. They are NOT used for API contracts - use
DTOs from the dto package for that.
"""

from .asset import Asset, CropArea, CropBox, TransformInstructions
from .outcomes import AssetFailure, NotMyRoute
from .resolved_image import ResolvedImage
from .transform_request import TransformRequest

__all__ = [
    "Asset",
    "AssetFailure",
    "CropArea",
    "CropBox",
    "NotMyRoute",
    "ResolvedImage",
    "TransformInstructions",
    "TransformRequest",
]
