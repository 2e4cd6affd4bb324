# Ports layer - Abstract interfaces (Protocols)

from .image_catalog import ImageCatalog

__all__ = ["ImageCatalog"]
