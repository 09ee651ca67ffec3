"""Custom exception classes for the image optimization service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_CACHE_WRITE_FAILED,
    ERROR_CODE_CONFIGURATION_INVALID,
    ERROR_CODE_SOURCE_FETCH_FAILED,
    ERROR_CODE_SOURCE_NOT_FOUND,
    ERROR_CODE_TRANSFORM_FAILED,
    ERROR_CODE_VALIDATION_FAILED,
)


class ImageServiceError(Exception):
    """
    Base exception for all image service errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(ImageServiceError):
    """Raised when request validation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ConfigurationError(ImageServiceError):
    """Raised when service configuration or the preset table is inconsistent."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CONFIGURATION_INVALID,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class SourceFetchError(ImageServiceError):
    """Raised when the original image cannot be retrieved."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_SOURCE_FETCH_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class SourceNotFoundError(SourceFetchError):
    """Raised when the original image key does not exist."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_SOURCE_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class TransformError(ImageServiceError):
    """Raised when decoding, resizing or encoding an image fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_TRANSFORM_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class CacheWriteError(ImageServiceError):
    """Raised when a transformed image cannot be written to the cache bucket."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CACHE_WRITE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
