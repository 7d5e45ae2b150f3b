"""Renderer protocol.

The renderer owns every pixel operation: drawing placeholder images and
cropping/resizing real assets. It always writes its result to a new file
and returns the path.
"""

from typing import Protocol, runtime_checkable

from image_on_demand.entities import Asset, TransformInstructions


@runtime_checkable
class Renderer(Protocol):
    """Protocol for image renderers."""

    def apply_transform(self, asset: Asset, instructions: TransformInstructions) -> str:
        """Crop and resize an asset.

        Args:
            asset: The source asset
            instructions: Target size, optional crop box and output extension

        Returns:
            Path of the transformed file

        Raises:
            RenderError: If the asset cannot be decoded or written
            ConfigurationError: If the output directory is unusable
        """
        ...

    def draw_placeholder(
        self,
        width: int,
        height: int,
        background_color: str,
        font_color: str,
        text: str,
    ) -> str:
        """Draw a text-on-background placeholder image.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            background_color: Hex color without '#'
            font_color: Hex color without '#'
            text: Text to draw (uppercased by the renderer)

        Returns:
            Path of the generated file

        Raises:
            ConfigurationError: If the font or output directory is unusable
        """
        ...
