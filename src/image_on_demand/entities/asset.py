"""Asset and crop geometry domain entities."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CropBox:
    """Absolute crop rectangle in pixels."""

    left: int
    top: int
    width: int
    height: int

    def as_box(self) -> tuple[int, int, int, int]:
        """Return the (left, upper, right, lower) tuple Pillow expects."""
        return (self.left, self.top, self.left + self.width, self.top + self.height)


@dataclass(frozen=True)
class CropArea:
    """Crop rectangle relative to the image size (all values in 0..1)."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def make_absolute(self, image_width: int, image_height: int) -> CropBox:
        """Scale the relative area to pixel coordinates of a concrete image."""
        left = round(self.x * image_width)
        top = round(self.y * image_height)
        width = min(round(self.width * image_width), image_width - left)
        height = min(round(self.height * image_height), image_height - top)
        return CropBox(left=left, top=top, width=max(width, 1), height=max(height, 1))


@dataclass(frozen=True)
class Asset:
    """A real image that can be transformed on demand.

    Attributes:
        uid: Identifier used in the ``id`` query parameter
        path: Location of the original file
        width: Original width in pixels
        height: Original height in pixels
        crop: Raw crop variant configuration (JSON string or mapping)
    """

    uid: int
    path: str
    width: int
    height: int
    crop: str | dict[str, Any] | None = None


@dataclass(frozen=True)
class TransformInstructions:
    """What the renderer should do with an asset."""

    width: int
    height: int
    crop: CropBox | None = None
    file_extension: str | None = None
