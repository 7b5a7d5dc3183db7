"""Local filesystem storage for product images."""

import uuid
from dataclasses import dataclass
from pathlib import Path

from storefront.core.config import Settings, get_settings
from storefront.core.exceptions import ValidationFailed
from storefront.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class UploadedImage:
    """An image received from a multipart request."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class LocalImageStorage:
    """Stores uploaded images under the configured storage path."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.storage_path = Path(self.settings.storage_path)

    def validate(self, image: UploadedImage) -> None:
        """Check the image type and size.

        Raises:
            ValidationFailed: If the image is empty, too large or not an allowed type.
        """
        if image.size == 0:
            raise ValidationFailed("image", "Product image is required")
        if image.size > self.settings.max_image_size:
            max_size_mb = self.settings.max_image_size / (1024 * 1024)
            raise ValidationFailed("image", f"Product image exceeds {max_size_mb:.0f}MB")
        if image.content_type not in self.settings.allowed_image_types:
            raise ValidationFailed("image", "Product image type is not allowed")

    def save(self, image: UploadedImage) -> str:
        """Write the image to disk under a unique name.

        Returns:
            The stored path, relative to the storage root.
        """
        self.validate(image)

        stored_name = f"{uuid.uuid4()}{Path(image.filename).suffix.lower()}"
        self.storage_path.mkdir(parents=True, exist_ok=True)
        (self.storage_path / stored_name).write_bytes(image.content)

        logger.info(
            "Image saved",
            filename=image.filename,
            path=stored_name,
            size=image.size,
        )
        return stored_name

    def delete(self, stored_path: str) -> None:
        """Remove a stored image if it exists."""
        (self.storage_path / Path(stored_path).name).unlink(missing_ok=True)
