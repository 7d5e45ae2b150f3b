"""Request parsing into normalized TransformRequest values.

Path layout::

    {base_path}{width}/{height}?id=&crop=&fileExt=&text=&bgColor=&textColor=&json=
    {dummy_base_path}{width}/{height}/{bgColor}/{textColor}

Dimensions are rounded up to the configured step sizes so that only a
bounded number of distinct image sizes is ever generated.
"""

import math
import re
from collections.abc import Iterable
from urllib.parse import parse_qs

from image_on_demand.config import Settings, get_settings
from image_on_demand.entities import NotMyRoute, TransformRequest
from image_on_demand.entities.transform_request import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_CROP_VARIANT,
    DEFAULT_FONT_COLOR,
    DEFAULT_TEXT,
)
from image_on_demand.exceptions import ConfigurationError

DUMMY_IMAGE_TEXT = "DummyImage"
TRUTHY_VALUES = frozenset({"", "1", "true", "yes", "on"})
HEX_COLOR_PATTERN = re.compile(r"^(?:[0-9a-fA-F]{3}){1,2}$")


def normalize_dimension(raw: int, step: int) -> int:
    """Round a dimension up to the next multiple of step.

    Raises:
        ConfigurationError: If step is not positive
    """
    if step <= 0:
        raise ConfigurationError(f"Image step size must be greater than 0, got {step}")
    return math.ceil(raw / step) * step


def _parse_positive_int(value: str | None, default: int) -> int:
    try:
        parsed = int(value) if value is not None else default
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_color(value: str | None, default: str) -> str:
    if value and HEX_COLOR_PATTERN.match(value):
        return value.lower()
    return default


class ParameterExtractor:
    """Parses request paths and query strings into TransformRequest values.

    Example:
        ```python
        extractor = ParameterExtractor.create(settings)
        result = extractor.extract("/image-service/400/300", "text=Hello")
        if isinstance(result, NotMyRoute):
            ...  # hand over to the next handler
        ```
    """

    def __init__(
        self,
        step_width: int,
        step_height: int,
        base_path: str = "/image-service/",
        dummy_base_path: str = "/dummyimage/",
        allowed_extensions: Iterable[str] = (),
        default_width: int = 400,
        default_height: int = 400,
        max_dimension: int = 4000,
        max_text_length: int = 100,
    ) -> None:
        """Initialize the extractor.

        Raises:
            ConfigurationError: If a step size is not positive
        """
        if step_width <= 0 or step_height <= 0:
            raise ConfigurationError(
                f"Image step sizes must be greater than 0, got {step_width}x{step_height}"
            )

        self._step_width = step_width
        self._step_height = step_height
        self._base_path = base_path
        self._dummy_base_path = dummy_base_path
        self._allowed_extensions = frozenset(ext.lower() for ext in allowed_extensions)
        self._default_width = default_width
        self._default_height = default_height
        self._max_dimension = max_dimension
        self._max_text_length = max_text_length

    @classmethod
    def create(cls, settings: Settings | None = None) -> "ParameterExtractor":
        """Factory method to create a ParameterExtractor from settings."""
        settings = settings or get_settings()
        return cls(
            step_width=settings.image_step_width,
            step_height=settings.image_step_height,
            base_path=settings.base_path,
            dummy_base_path=settings.dummy_base_path,
            allowed_extensions=settings.allowed_extensions,
            default_width=settings.default_width,
            default_height=settings.default_height,
            max_dimension=settings.max_image_dimension,
            max_text_length=settings.max_text_length,
        )

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def dummy_base_path(self) -> str:
        return self._dummy_base_path

    def _dimensions(self, segments: list[str]) -> tuple[int, int]:
        raw_width = _parse_positive_int(segments[0] if len(segments) > 0 else None, self._default_width)
        raw_height = _parse_positive_int(segments[1] if len(segments) > 1 else None, self._default_height)
        return min(raw_width, self._max_dimension), min(raw_height, self._max_dimension)

    def _text(self, value: str | None, default: str) -> str:
        if not value:
            return default
        return value[: self._max_text_length]

    def extract(self, request_path: str, query_string: str) -> TransformRequest | NotMyRoute:
        """Parse a request for the main image route.

        Args:
            request_path: The URL path (without query string)
            query_string: The raw query string (without leading '?')

        Returns:
            The normalized request, or NotMyRoute if the path is outside the base path
        """
        if not request_path.startswith(self._base_path):
            return NotMyRoute(path=request_path)

        segments = request_path[len(self._base_path):].split("/")
        raw_width, raw_height = self._dimensions(segments)

        # First value wins for repeated keys; unknown keys are ignored
        params = {key: values[0] for key, values in parse_qs(query_string, keep_blank_values=True).items()}

        file_extension = params.get("fileExt", "").lower() or None
        if file_extension not in self._allowed_extensions:
            file_extension = None

        file_reference_id = _parse_positive_int(params.get("id"), 0)

        return TransformRequest(
            width=normalize_dimension(raw_width, self._step_width),
            height=normalize_dimension(raw_height, self._step_height),
            file_reference_id=file_reference_id,
            crop_variant=params.get("crop") or DEFAULT_CROP_VARIANT,
            file_extension=file_extension,
            text=self._text(params.get("text"), DEFAULT_TEXT),
            background_color=_parse_color(params.get("bgColor"), DEFAULT_BACKGROUND_COLOR),
            font_color=_parse_color(params.get("textColor"), DEFAULT_FONT_COLOR),
            wants_json="json" in params and params["json"].lower() in TRUTHY_VALUES,
            query_string=query_string,
        )

    def extract_dummy(self, request_path: str) -> TransformRequest | NotMyRoute:
        """Parse a request for the dummy image route.

        Dimensions are taken as-is (no step rounding) and the text is fixed.

        Args:
            request_path: The URL path

        Returns:
            The request, or NotMyRoute if the path is outside the dummy base path
        """
        if not request_path.startswith(self._dummy_base_path):
            return NotMyRoute(path=request_path)

        segments = request_path[len(self._dummy_base_path):].split("/")
        width, height = self._dimensions(segments)

        return TransformRequest(
            width=width,
            height=height,
            text=DUMMY_IMAGE_TEXT,
            background_color=_parse_color(segments[2] if len(segments) > 2 else None, DEFAULT_BACKGROUND_COLOR),
            font_color=_parse_color(segments[3] if len(segments) > 3 else None, DEFAULT_FONT_COLOR),
        )
