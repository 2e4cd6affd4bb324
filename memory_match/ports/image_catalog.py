"""Port interface for the image catalog."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ImageCatalog(Protocol):
    """Port supplying the image pool for new decks.

    Image keys are opaque to the game; mapping them to renderable assets
    is the presentation shell's concern.
    """

    def get_image_keys(self) -> list[str]:
        """Get the image keys available for dealing.

        Returns:
            Distinct image keys in catalog order
        """
        ...

    def get_image_file(self, image_key: str) -> str | None:
        """Get the asset file name the presentation shell renders for a key.

        Args:
            image_key: Key returned by get_image_keys()

        Returns:
            File name, or None if the catalog has no asset for the key
        """
        ...
