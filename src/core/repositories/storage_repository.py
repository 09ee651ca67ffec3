"""Abstract contracts for original and transformed image storage."""

from abc import ABC, abstractmethod

from core.models.image import SourceImage


class ImageSourceRepository(ABC):
    """Read-only access to original images.

    Implementations could be S3, GCS, local disk, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
    def fetch_original(self, *, key: str) -> SourceImage:
        """Fetch an original image by key.

        Args:
            key: Object key of the original image

        Returns:
            Source image bytes and declared content type

        Raises:
            SourceNotFoundError: If the key does not exist
            SourceFetchError: If the store cannot be read
        """


class TransformedImageRepository(ABC):
    """Write access to the store of transformed copies."""

    @abstractmethod
    def store_transformed(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        cache_control: str,
    ) -> None:
        """Persist a transformed image.

        Args:
            key: Cache key (original path + descriptor)
            body: Encoded image bytes
            content_type: MIME type of the encoded bytes
            cache_control: Cache-Control hint stored as object metadata

        Raises:
            CacheWriteError: If the write fails
        """
