# Adapters layer - Concrete implementations

from .bundled_images import BundledImageCatalog, ImageCatalogError

__all__ = [
    "BundledImageCatalog",
    "ImageCatalogError",
]
