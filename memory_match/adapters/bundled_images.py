"""Image catalog backed by a JSON manifest.

The bundled manifest ships with the package. Set IMAGE_CATALOG_PATH to
point at another manifest with the same shape.
"""

import json
import logging
from importlib import resources
from pathlib import Path

from memory_match.domain.constants import DEFAULT_IMAGE_KEYS

logger = logging.getLogger(__name__)


class ImageCatalogError(Exception):
    """Raised when an image manifest cannot be read."""

    pass


class BundledImageCatalog:
    """ImageCatalog implementation reading keys from a JSON manifest.

    Manifest shape::

        {"images": [{"key": "bee", "file": "bee.png"}, ...]}

    Only the keys matter to the game; the file names are passed through
    for the presentation shell.
    """

    def __init__(self, manifest_path: str | None = None) -> None:
        self._manifest_path = manifest_path
        self._images: list[dict] = self._load_images()

    def _load_images(self) -> list[dict]:
        """Load image entries from the manifest.

        Uses importlib.resources for the bundled manifest.
        Falls back to the built-in key list if the package data is missing.
        """
        if self._manifest_path is not None:
            try:
                with open(self._manifest_path, encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise ImageCatalogError(
                    f"Could not read image manifest {self._manifest_path}: {e}"
                ) from e
        else:
            try:
                data_path = resources.files("memory_match.adapters.data").joinpath("images.json")
                with data_path.open("r", encoding="utf-8") as f:
                    data = json.load(f)
            except (ModuleNotFoundError, FileNotFoundError):
                logger.warning("Bundled image manifest missing, using built-in image keys")
                return [{"key": key, "file": f"{key}.png"} for key in DEFAULT_IMAGE_KEYS]

        images = data.get("images") if isinstance(data, dict) else None
        if not images:
            raise ImageCatalogError("Image manifest has no 'images' entries")

        entries = []
        seen: set[str] = set()
        for entry in images:
            key = entry.get("key") if isinstance(entry, dict) else None
            if not key:
                raise ImageCatalogError(f"Image entry without a key: {entry!r}")
            if key in seen:
                continue
            seen.add(key)
            entries.append({"key": key, "file": entry.get("file")})
        return entries

    def get_image_keys(self) -> list[str]:
        """Get image keys in manifest order."""
        return [entry["key"] for entry in self._images]

    def get_image_file(self, image_key: str) -> str | None:
        """Get the asset file name for an image key, if the manifest has one."""
        return next((e["file"] for e in self._images if e["key"] == image_key), None)
