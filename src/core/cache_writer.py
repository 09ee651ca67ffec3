"""
Best-effort persistence of transformed images.

A failed write is logged and reported through ``CacheWriteOutcome``; it
never raises, so the transformed bytes are always returned to the caller.
"""

from aws_lambda_powertools import Logger

from core.models.errors import ImageServiceError
from core.models.image import CacheWriteOutcome, CacheWriteStatus
from core.repositories.storage_repository import TransformedImageRepository
from core.utils.constants import ERROR_CODE_CACHE_WRITE_FAILED

logger = Logger(UTC=True)


class CacheWriter:
    """Stores transformed images when a transformed-image store is configured."""

    def __init__(
        self,
        storage: TransformedImageRepository | None,
        *,
        cache_control: str,
    ) -> None:
        self._storage = storage
        self._cache_control = cache_control

    @property
    def enabled(self) -> bool:
        return self._storage is not None

    def write(self, *, cache_key: str, body: bytes, content_type: str) -> CacheWriteOutcome:
        if self._storage is None:
            return CacheWriteOutcome(status=CacheWriteStatus.SKIPPED, cache_key=cache_key)

        try:
            self._storage.store_transformed(
                key=cache_key,
                body=body,
                content_type=content_type,
                cache_control=self._cache_control,
            )
        except ImageServiceError as exc:
            logger.warning(
                "Could not upload transformed image",
                extra={"cache_key": cache_key, "error_code": exc.error_code, "details": exc.details},
            )
            return CacheWriteOutcome(
                status=CacheWriteStatus.FAILED,
                cache_key=cache_key,
                error_code=exc.error_code,
            )
        except Exception:
            logger.exception(
                "Unexpected error uploading transformed image",
                extra={"cache_key": cache_key},
            )
            return CacheWriteOutcome(
                status=CacheWriteStatus.FAILED,
                cache_key=cache_key,
                error_code=ERROR_CODE_CACHE_WRITE_FAILED,
            )

        return CacheWriteOutcome(status=CacheWriteStatus.WRITTEN, cache_key=cache_key)
