"""Exception hierarchy for the image service.

Only ConfigurationError is meant to escape a request. RenderError and
CropResolutionError are raised by collaborators and recovered by the
resolver, which falls back to a placeholder image.
"""


class ImageServiceError(Exception):
    """Base class for all image service errors."""


class ConfigurationError(ImageServiceError):
    """Infrastructure is misconfigured (bad step size, missing font, unwritable directory)."""


class RenderError(ImageServiceError):
    """The renderer could not transform an asset."""


class CropResolutionError(ImageServiceError):
    """A crop variant configuration could not be interpreted."""
