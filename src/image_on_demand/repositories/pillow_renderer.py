"""Pillow implementation of the Renderer protocol.

Placeholders are drawn on a solid background with the text centered
horizontally and its baseline at ``height / 2 + font_size / 3``. Real
assets are cropped to their crop box (if any) and then scaled and
center-cropped to fill the requested size exactly.
"""

import logging
import os
import uuid
from pathlib import Path

from PIL import Image, ImageColor, ImageDraw, ImageFont, ImageOps

from image_on_demand.config import Settings, get_settings
from image_on_demand.entities import Asset, TransformInstructions
from image_on_demand.exceptions import ConfigurationError, RenderError

logger = logging.getLogger(__name__)

MIN_FONT_SIZE = 20
MAX_FONT_SIZE = 80
PLACEHOLDER_EXTENSION = "png"


def compute_font_size(width: int) -> int:
    """Font size for a placeholder of the given width: clamp(width / 15, 20, 80)."""
    return int(max(min(width / 15, MAX_FONT_SIZE), MIN_FONT_SIZE))


class PillowRenderer:
    """Renders placeholders and transforms assets with Pillow.

    Every call writes a new file named ``{prefix}_{uuid}.{ext}`` into the
    images directory, so concurrent renders never collide.
    """

    def __init__(
        self,
        images_dir: str | Path,
        font_path: str | None = None,
        filename_prefix: str = "image_on_demand_service",
    ) -> None:
        """Initialize the renderer.

        Args:
            images_dir: Directory generated files are written to (created on demand).
            font_path: TrueType font file. If empty, Pillow's bundled font is used.
            filename_prefix: Prefix of generated file names.
        """
        self._images_dir = Path(images_dir)
        self._font_path = font_path or None
        self._filename_prefix = filename_prefix

    @classmethod
    def create(cls, settings: Settings | None = None) -> "PillowRenderer":
        """Factory method to create PillowRenderer from settings."""
        settings = settings or get_settings()
        return cls(images_dir=settings.images_dir, font_path=settings.font_path)

    @property
    def images_dir(self) -> Path:
        return self._images_dir

    def _ensure_images_dir(self) -> Path:
        try:
            self._images_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(f"Cannot create images directory {self._images_dir}: {e}") from e

        if not os.access(self._images_dir, os.W_OK):
            raise ConfigurationError(f"Images directory {self._images_dir} is not writable")
        return self._images_dir

    def _new_file_path(self, extension: str) -> Path:
        directory = self._ensure_images_dir()
        return directory / f"{self._filename_prefix}_{uuid.uuid4().hex}.{extension}"

    def _load_font(self, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        if self._font_path is None:
            return ImageFont.load_default(size=size)

        try:
            return ImageFont.truetype(self._font_path, size=size)
        except OSError as e:
            raise ConfigurationError(f"Cannot load font {self._font_path}: {e}") from e

    @staticmethod
    def _parse_color(color: str) -> tuple[int, ...]:
        try:
            return ImageColor.getrgb(f"#{color}")
        except ValueError as e:
            raise RenderError(f"Invalid color {color!r}") from e

    def draw_placeholder(
        self,
        width: int,
        height: int,
        background_color: str,
        font_color: str,
        text: str,
    ) -> str:
        """Draw a placeholder image and return its path.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            background_color: Hex color without '#'
            font_color: Hex color without '#'
            text: Text to draw, rendered uppercase

        Returns:
            Path of the PNG file

        Raises:
            ConfigurationError: If the font or images directory is unusable
        """
        font_size = compute_font_size(width)
        font = self._load_font(font_size)
        target = self._new_file_path(PLACEHOLDER_EXTENSION)

        canvas = Image.new("RGB", (width, height), self._parse_color(background_color))
        draw = ImageDraw.Draw(canvas)
        fill = self._parse_color(font_color)
        label = text.upper()
        baseline = height / 2 + font_size / 3

        if isinstance(font, ImageFont.FreeTypeFont):
            draw.text((width / 2, baseline), label, fill=fill, font=font, anchor="ms")
        else:
            # Bitmap fonts only support top-left anchoring
            left, top, right, bottom = draw.textbbox((0, 0), label, font=font)
            draw.text(((width - (right - left)) / 2, baseline - (bottom - top)), label, fill=fill, font=font)

        try:
            canvas.save(target, format="PNG")
        except OSError as e:
            raise ConfigurationError(f"Cannot write placeholder image {target}: {e}") from e

        logger.debug("Drew %dx%d placeholder %r at %s", width, height, label, target)
        return str(target)

    def apply_transform(self, asset: Asset, instructions: TransformInstructions) -> str:
        """Crop and resize an asset and return the path of the result.

        Raises:
            RenderError: If the asset cannot be decoded, the extension is not
                writable by Pillow, or saving fails
            ConfigurationError: If the images directory is unusable
        """
        extension = (instructions.file_extension or Path(asset.path).suffix.lstrip(".") or PLACEHOLDER_EXTENSION).lower()
        image_format = Image.registered_extensions().get(f".{extension}")
        if image_format is None or image_format not in Image.SAVE:
            raise RenderError(f"Cannot write images with extension {extension!r}")

        target = self._new_file_path(extension)

        try:
            with Image.open(asset.path) as source:
                source.load()
                image = source.crop(instructions.crop.as_box()) if instructions.crop else source.copy()

            image = ImageOps.fit(image, (instructions.width, instructions.height), method=Image.Resampling.LANCZOS)
            if image_format == "JPEG" and image.mode not in ("RGB", "L"):
                image = image.convert("RGB")
            image.save(target, format=image_format)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise RenderError(f"Cannot transform asset {asset.uid}: {e}") from e

        logger.debug("Transformed asset %s to %dx%d at %s", asset.uid, instructions.width, instructions.height, target)
        return str(target)
