"""Transform request domain entity."""

from dataclasses import dataclass

DEFAULT_TEXT = "Dummy Image"
DEFAULT_BACKGROUND_COLOR = "000000"
DEFAULT_FONT_COLOR = "ffffff"
DEFAULT_CROP_VARIANT = "default"


@dataclass(frozen=True)
class TransformRequest:
    """Normalized parameters of a single image request.

    Built once by the ParameterExtractor and threaded unchanged through
    cache key derivation, resolution and response building.

    Attributes:
        width: Target width, a positive multiple of the configured step
        height: Target height, a positive multiple of the configured step
        file_reference_id: Asset uid, 0 means "render a placeholder"
        crop_variant: Name of the crop variant to apply to the asset
        file_extension: Output extension, only set when allow-listed
        text: Placeholder text (rendered uppercase)
        background_color: Placeholder background as hex without '#'
        font_color: Placeholder text color as hex without '#'
        wants_json: Respond with a JSON reference instead of the bytes
        query_string: The raw query string, input of the cache key
    """

    width: int
    height: int
    file_reference_id: int = 0
    crop_variant: str = DEFAULT_CROP_VARIANT
    file_extension: str | None = None
    text: str = DEFAULT_TEXT
    background_color: str = DEFAULT_BACKGROUND_COLOR
    font_color: str = DEFAULT_FONT_COLOR
    wants_json: bool = False
    query_string: str = ""

    @property
    def wants_asset(self) -> bool:
        """Whether a real asset was requested."""
        return self.file_reference_id > 0
