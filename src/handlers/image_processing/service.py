"""
Business logic for on-demand image transformation.

This module coordinates fetching an original image, transforming it and
writing the result back to the transformed-image bucket.
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager

from aws_lambda_powertools import Logger

from core.cache_writer import CacheWriter
from core.config import ServiceConfig
from core.infrastructure.adapters.s3_adapter import S3Adapter, create_s3_client
from core.infrastructure.aws.s3_image_source import S3ImageSource
from core.infrastructure.aws.s3_transformed_storage import S3TransformedStorage
from core.models.image import ProcessingResult
from core.models.operations import build_cache_key
from core.repositories.storage_repository import ImageSourceRepository
from core.transformer import ImageTransformer

logger = Logger(UTC=True)


@contextmanager
def _timed(timings: dict[str, float], phase: str) -> Iterator[None]:
    start = time.perf_counter()
    try:
        yield
    finally:
        timings[phase] = round((time.perf_counter() - start) * 1000, 2)


class ImageProcessingService:
    """Application service responsible for serving transformed images.

    This service orchestrates:
    - Fetching the original image
    - Resizing and re-encoding it according to the descriptor
    - Best-effort upload of the result for future requests
    """

    def __init__(
        self,
        *,
        config: ServiceConfig,
        source: ImageSourceRepository,
        transformer: ImageTransformer,
        cache_writer: CacheWriter,
    ) -> None:
        self.config = config
        self.source = source
        self.transformer = transformer
        self.cache_writer = cache_writer

    @classmethod
    def from_config(cls, config: ServiceConfig) -> "ImageProcessingService":
        """Wire S3-backed dependencies for the given configuration."""
        client = create_s3_client(config)

        storage = None
        if config.transformed_bucket:
            storage = S3TransformedStorage(S3Adapter(config.transformed_bucket, client))

        return cls(
            config=config,
            source=S3ImageSource(S3Adapter(config.original_bucket, client)),
            transformer=ImageTransformer(),
            cache_writer=CacheWriter(storage, cache_control=config.cache_control),
        )

    def process(self, original_path: str, descriptor: str) -> ProcessingResult:
        """Fetch, transform and cache an image.

        The flow is:
        1. Download the original image
        2. Apply the descriptor's transformation
        3. Upload the result (failures are reported, never raised)

        Args:
            original_path: Key of the original image
            descriptor: Canonical operation descriptor

        Returns:
            Transformed image together with the cache write outcome

        Raises:
            SourceFetchError: If the original image cannot be downloaded
            TransformError: If the image cannot be transformed
        """
        logger.debug(
            "Processing image",
            extra={"original_path": original_path, "descriptor": descriptor},
        )
        timings: dict[str, float] = {}

        with _timed(timings, "download"):
            source = self.source.fetch_original(key=original_path)

        with _timed(timings, "transform"):
            image = self.transformer.transform(source.body, descriptor)

        cache_key = build_cache_key(original_path, descriptor)
        with _timed(timings, "upload"):
            cache_write = self.cache_writer.write(
                cache_key=cache_key,
                body=image.body,
                content_type=image.content_type,
            )

        if self.config.log_timing:
            logger.info("Image processing timings", extra={"cache_key": cache_key, **timings})

        logger.info(
            "Image processed",
            extra={
                "cache_key": cache_key,
                "content_type": image.content_type,
                "size": len(image.body),
                "cache_write": cache_write.status.value,
            },
        )

        return ProcessingResult(
            original_path=original_path,
            descriptor=descriptor,
            image=image,
            cache_write=cache_write,
            timings_ms=timings if self.config.log_timing else {},
        )
