"""Asset repository protocol."""

from typing import Protocol, runtime_checkable

from image_on_demand.entities import Asset


@runtime_checkable
class AssetRepository(Protocol):
    """Protocol for looking up real images by uid."""

    def find_by_uid(self, uid: int) -> Asset | None:
        """Find an asset.

        Args:
            uid: The asset identifier from the ``id`` query parameter

        Returns:
            The asset, or None if no readable asset has that uid
        """
        ...
