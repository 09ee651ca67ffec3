"""S3-backed implementation of ImageSourceRepository."""

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3AdapterProtocol
from core.models.errors import SourceFetchError, SourceNotFoundError
from core.models.image import SourceImage
from core.repositories.storage_repository import ImageSourceRepository
from core.utils.constants import DEFAULT_SOURCE_CONTENT_TYPE
from core.utils.mime import detect_mime_type

logger = Logger(UTC=True)

NOT_FOUND_ERROR_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


class S3ImageSource(ImageSourceRepository):
    """Reads original images from the source bucket."""

    def __init__(self, adapter: S3AdapterProtocol) -> None:
        self._s3 = adapter

    def fetch_original(self, *, key: str) -> SourceImage:
        """Download original image bytes from S3."""
        logger.debug("Downloading original image", extra={"key": key, "bucket": self._s3.bucket})

        try:
            response = self._s3.get_object(key=key)
            body = response["Body"].read()
            content_type = response.get("ContentType") or DEFAULT_SOURCE_CONTENT_TYPE

        except ClientError as exc:
            error_code = exc.response.get("Error", {}).get("Code")
            logger.error(
                "S3 download failed",
                extra={"key": key, "error_code": error_code},
            )

            if error_code in NOT_FOUND_ERROR_CODES:
                raise SourceNotFoundError(
                    message="Original image not found",
                    details={"key": key},
                ) from exc

            raise SourceFetchError(
                message="Unable to download original image",
                details={"key": key, "error_code": error_code},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error downloading original image")
            raise SourceFetchError(
                message="Unable to download original image",
                details={"key": key},
            ) from exc

        if content_type == DEFAULT_SOURCE_CONTENT_TYPE:
            try:
                content_type = detect_mime_type(body)
            except ValueError:
                logger.debug("Could not sniff source content type", extra={"key": key})

        logger.info(
            "Original image downloaded",
            extra={"key": key, "size": len(body), "content_type": content_type},
        )

        return SourceImage(key=key, body=body, content_type=content_type)
