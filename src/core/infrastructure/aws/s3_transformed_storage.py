"""S3-backed implementation of TransformedImageRepository."""

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3AdapterProtocol
from core.models.errors import CacheWriteError
from core.repositories.storage_repository import TransformedImageRepository
from core.utils.constants import CACHE_CONTROL_METADATA_KEY

logger = Logger(UTC=True)


class S3TransformedStorage(TransformedImageRepository):
    """Writes transformed images to the transformed-image bucket."""

    def __init__(self, adapter: S3AdapterProtocol) -> None:
        self._s3 = adapter

    def store_transformed(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        cache_control: str,
    ) -> None:
        """Upload transformed image bytes with their cache-control hint."""
        logger.debug(
            "Uploading transformed image",
            extra={"key": key, "bucket": self._s3.bucket, "size": len(body)},
        )

        try:
            self._s3.put_object(
                key=key,
                body=body,
                content_type=content_type,
                metadata={CACHE_CONTROL_METADATA_KEY: cache_control},
            )
            logger.info("Transformed image uploaded", extra={"key": key})

        except ClientError as exc:
            error_code = exc.response.get("Error", {}).get("Code")
            logger.error(
                "S3 upload failed",
                extra={"key": key, "error_code": error_code},
            )
            raise CacheWriteError(
                message="Unable to store transformed image",
                details={"key": key, "error_code": error_code},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error uploading transformed image")
            raise CacheWriteError(
                message="Unable to store transformed image",
                details={"key": key},
            ) from exc
