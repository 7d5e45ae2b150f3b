"""Asset repository backed by a JSON manifest file.

Manifest format::

    {
        "42": {
            "path": "photos/vineyard.jpg",
            "crop": {"default": {"cropArea": {"x": 0, "y": 0, "width": 1, "height": 1}}}
        }
    }

Relative paths are resolved against the manifest's directory. ``crop``
may also be given as a JSON-encoded string.
"""

import json
import logging
from pathlib import Path
from typing import Any

from PIL import Image

from image_on_demand.config import Settings, get_settings
from image_on_demand.entities import Asset
from image_on_demand.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class JsonAssetRepository:
    """Looks up assets by uid in a manifest loaded once at startup.

    This class satisfies the AssetRepository protocol through structural
    typing. Image dimensions are read from the file header on lookup, so a
    manifest entry pointing to a missing or unreadable file is reported as
    not found.
    """

    def __init__(
        self,
        entries: dict[str, dict[str, Any]] | None = None,
        base_dir: str | Path | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            entries: Manifest content keyed by uid (as string).
            base_dir: Directory relative asset paths are resolved against.
        """
        self._entries = entries or {}
        self._base_dir = Path(base_dir) if base_dir else Path.cwd()

    @classmethod
    def from_manifest(cls, manifest_path: str | Path) -> "JsonAssetRepository":
        """Load a repository from a manifest file.

        Raises:
            ConfigurationError: If the manifest cannot be read or is not a JSON object
        """
        path = Path(manifest_path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Cannot read asset manifest {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Asset manifest {path} must contain a JSON object")

        logger.info("Loaded %d assets from %s", len(data), path)
        return cls(entries=data, base_dir=path.parent)

    @classmethod
    def create(cls, settings: Settings | None = None) -> "JsonAssetRepository":
        """Factory method; an unset ASSET_MANIFEST yields an empty repository."""
        settings = settings or get_settings()
        if not settings.asset_manifest:
            return cls()
        return cls.from_manifest(settings.asset_manifest)

    def find_by_uid(self, uid: int) -> Asset | None:
        """Find an asset by uid.

        Args:
            uid: The asset identifier

        Returns:
            The asset, or None if unknown or unreadable
        """
        entry = self._entries.get(str(uid))
        if not isinstance(entry, dict) or not entry.get("path"):
            return None

        path = Path(entry["path"])
        if not path.is_absolute():
            path = self._base_dir / path

        try:
            with Image.open(path) as image:
                width, height = image.size
        except (OSError, Image.DecompressionBombError) as e:
            logger.warning("Asset %s is not readable at %s: %s", uid, path, e)
            return None

        return Asset(
            uid=uid,
            path=str(path),
            width=width,
            height=height,
            crop=entry.get("crop"),
        )

    def __len__(self) -> int:
        return len(self._entries)
