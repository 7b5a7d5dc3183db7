"""Storage for uploaded product images."""

from storefront.infrastructure.storage.local_image_storage import LocalImageStorage, UploadedImage

__all__ = ["LocalImageStorage", "UploadedImage"]
