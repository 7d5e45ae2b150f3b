"""File store protocol for existence, size and MIME lookups."""

from typing import Protocol, runtime_checkable

from image_on_demand.entities import ResolvedImage


@runtime_checkable
class FileStore(Protocol):
    """Protocol for inspecting resolved image files."""

    def exists(self, path: str) -> bool:
        ...

    def size(self, path: str) -> int:
        ...

    def mime_type(self, path: str) -> str:
        ...

    def describe(self, path: str) -> ResolvedImage:
        """Collect path, size and MIME type of a file into a ResolvedImage."""
        ...
