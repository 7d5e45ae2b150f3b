"""HTTP response construction for resolved images."""

from pathlib import Path

from fastapi.responses import FileResponse, JSONResponse, Response

from image_on_demand.dto import PublicUrlResponse
from image_on_demand.entities import ResolvedImage


class ResponseBuilder:
    """Turns a ResolvedImage into either a file stream or a JSON reference.

    Files inside the images directory are published under
    ``public_url_prefix``; anything else is referenced by its path.
    """

    def __init__(self, images_dir: str | Path, public_url_prefix: str = "/image-service-files/") -> None:
        self._images_dir = Path(images_dir).resolve()
        self._public_url_prefix = public_url_prefix.rstrip("/") + "/"

    def public_url_for(self, path: str) -> str:
        """Map a file path to the URL it is served under."""
        resolved = Path(path).resolve()
        try:
            relative = resolved.relative_to(self._images_dir)
        except ValueError:
            return path
        return self._public_url_prefix + relative.as_posix()

    def build(self, resolved: ResolvedImage, wants_json: bool) -> Response:
        """Build the HTTP response.

        Args:
            resolved: The image to send
            wants_json: Send ``{"publicUrl": ...}`` instead of the image bytes

        Returns:
            A JSONResponse or a FileResponse with Content-Length and Content-Type set
        """
        if wants_json:
            body = PublicUrlResponse(public_url=self.public_url_for(resolved.path))
            return JSONResponse(body.model_dump(by_alias=True))

        return FileResponse(
            resolved.path,
            media_type=resolved.mime_type,
            headers={"Content-Length": str(resolved.size)},
        )
