"""Crop variant configuration parsing.

An asset's crop configuration maps variant names to a relative crop area::

    {"default": {"cropArea": {"x": 0.1, "y": 0, "width": 0.8, "height": 1}}}

It may be stored as a mapping or as a JSON string. Unknown variants and
empty configurations resolve to an empty area, which means "do not crop".
"""

import json
from typing import Any

from image_on_demand.entities import CropArea
from image_on_demand.exceptions import CropResolutionError


def parse_crop_variants(crop: str | dict[str, Any] | None) -> dict[str, Any]:
    """Decode a crop configuration into a mapping of variants.

    Raises:
        CropResolutionError: If the configuration is not valid JSON or not an object
    """
    if not crop:
        return {}

    if isinstance(crop, str):
        try:
            crop = json.loads(crop)
        except ValueError as e:
            raise CropResolutionError(f"Crop configuration is not valid JSON: {e}") from e

    if not isinstance(crop, dict):
        raise CropResolutionError("Crop configuration must be a JSON object")
    return crop


def resolve_crop_area(crop: str | dict[str, Any] | None, variant: str) -> CropArea:
    """Return the relative crop area of a variant.

    Raises:
        CropResolutionError: If the variant exists but its area is malformed
    """
    variants = parse_crop_variants(crop)
    config = variants.get(variant)
    if config is None:
        return CropArea()

    area = config.get("cropArea") if isinstance(config, dict) else None
    if area is None:
        return CropArea()

    try:
        values = {name: float(area.get(name, 0.0)) for name in ("x", "y", "width", "height")}
    except (AttributeError, TypeError, ValueError) as e:
        raise CropResolutionError(f"Crop variant {variant!r} has an invalid crop area: {e}") from e

    if any(value < 0 or value > 1 for value in values.values()):
        raise CropResolutionError(f"Crop variant {variant!r} must use relative values between 0 and 1")

    return CropArea(**values)
