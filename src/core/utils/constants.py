"""Global constants used throughout the application.

This module centralizes error codes, format tables, header names and
environment variable names shared by the normalizer, the transformer and
the Lambda handlers.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_CONFIGURATION_INVALID = "CONFIGURATION_INVALID"

# Source Errors
ERROR_CODE_SOURCE_NOT_FOUND = "SOURCE_NOT_FOUND"
ERROR_CODE_SOURCE_FETCH_FAILED = "SOURCE_FETCH_FAILED"

# Processing Errors
ERROR_CODE_TRANSFORM_FAILED = "TRANSFORM_FAILED"

# Cache Errors
ERROR_CODE_CACHE_WRITE_FAILED = "CACHE_WRITE_FAILED"


# ============================================================================
# Operation Descriptors
# ============================================================================

ORIGINAL_DESCRIPTOR: Final = "original"
PRESET_OPERATION: Final = "preset"

# Keys are emitted in this order when building a canonical descriptor.
OPERATION_ORDER: Final[tuple[str, ...]] = (PRESET_OPERATION,)

OPERATION_SEPARATOR: Final = ","
KEY_VALUE_SEPARATOR: Final = "="

ALLOWED_PRESETS: Final[frozenset[str]] = frozenset(
    {
        "thumb",
        "small",
        "medium",
        "large",
        "xlarge",
        "small_wide",
        "medium_wide",
        "large_wide",
        "xlarge_wide",
        "doordash",
    }
)


# ============================================================================
# Output Formats
# ============================================================================

DEFAULT_OUTPUT_FORMAT: Final = "jpeg"
DEFAULT_OUTPUT_QUALITY: Final = 80

FORMAT_CONTENT_TYPE_MAP: Final[dict[str, str]] = {
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
    "png": "image/png",
    "avif": "image/avif",
}

# Pillow encoder names
PILLOW_FORMAT_MAP: Final[dict[str, str]] = {
    "jpeg": "JPEG",
    "jpg": "JPEG",
    "gif": "GIF",
    "webp": "WEBP",
    "png": "PNG",
    "avif": "AVIF",
}

ANIMATED_FORMATS: Final[frozenset[str]] = frozenset({"gif", "webp", "png"})
LOSSY_FORMATS: Final[frozenset[str]] = frozenset({"jpeg", "jpg", "webp", "avif"})

DEFAULT_SOURCE_CONTENT_TYPE = "application/octet-stream"


# ============================================================================
# HTTP Configuration
# ============================================================================

SECRET_HEADER = "x-origin-secret-header"
ALLOWED_METHOD = "GET"
DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_CACHE_CONTROL = "max-age=31622400"
CACHE_CONTROL_METADATA_KEY = "cache-control"
SERVER_TIMING_HEADER = "Server-Timing"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_ORIGINAL_IMAGE_BUCKET_NAME = "ORIGINAL_IMAGE_BUCKET_NAME"
ENV_TRANSFORMED_IMAGE_BUCKET_NAME = "TRANSFORMED_IMAGE_BUCKET_NAME"
ENV_TRANSFORMED_IMAGE_CACHE_TTL = "TRANSFORMED_IMAGE_CACHE_TTL"
ENV_SECRET_KEY = "SECRET_KEY"
ENV_LOG_TIMING = "LOG_TIMING"
DEFAULT_AWS_REGION = "us-east-1"

# ============================================================================
# Observability
# ============================================================================

METRICS_NAMESPACE = "ImageOptimization"
SERVICE_NAME = "image-optimization"
