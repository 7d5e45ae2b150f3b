"""Resolved image domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ResolvedImage:
    """A file ready to be sent back to the client.

    Attributes:
        path: Absolute or working-directory relative file path
        size: File size in bytes
        mime_type: MIME type of the file content
    """

    path: str
    size: int
    mime_type: str
