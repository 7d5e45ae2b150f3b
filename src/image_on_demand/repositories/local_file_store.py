"""Local filesystem implementation of FileStore."""

import mimetypes
import os

from PIL import Image

from image_on_demand.entities import ResolvedImage

DEFAULT_MIME_TYPE = "application/octet-stream"


class LocalFileStore:
    """Reads existence, size and MIME type of files on the local disk.

    The MIME type comes from the decoded image format when Pillow can
    identify the file, falling back to the file extension.
    """

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def size(self, path: str) -> int:
        return os.path.getsize(path)

    def mime_type(self, path: str) -> str:
        try:
            with Image.open(path) as image:
                mime = Image.MIME.get(image.format or "")
        except (OSError, Image.DecompressionBombError):
            mime = None

        if mime:
            return mime

        guessed, _ = mimetypes.guess_type(path)
        return guessed or DEFAULT_MIME_TYPE

    def describe(self, path: str) -> ResolvedImage:
        return ResolvedImage(path=path, size=self.size(path), mime_type=self.mime_type(path))
