"""
Lambda handler responsible for transforming images on a cache miss.
"""

import hmac
from functools import lru_cache
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.config import ServiceConfig
from core.models.errors import SourceFetchError, SourceNotFoundError, TransformError
from core.models.image import CacheWriteStatus, ProcessingResult
from core.utils.constants import (
    ALLOWED_METHOD,
    METRICS_NAMESPACE,
    SECRET_HEADER,
    SERVER_TIMING_HEADER,
    SERVICE_NAME,
)
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors

from .models import ImageRequest
from .service import ImageProcessingService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE, service=SERVICE_NAME)


@lru_cache(maxsize=1)
def get_service() -> ImageProcessingService:
    """Build the service once per execution environment."""
    return ImageProcessingService.from_config(ServiceConfig.from_env())


def _is_authorized(headers: dict[str, Any], secret_key: str | None) -> bool:
    if not secret_key:
        return False
    provided = headers.get(SECRET_HEADER)
    if not isinstance(provided, str):
        return False
    return hmac.compare_digest(provided.encode("utf-8"), secret_key.encode("utf-8"))


def _server_timing(result: ProcessingResult) -> str:
    return ",".join(f"img-{phase};dur={duration}" for phase, duration in result.timings_ms.items())


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle a request for a transformed image.

    Expected function URL event structure (payload v2):
    {
        "headers": {"x-origin-secret-header": "..."},
        "requestContext": {"http": {"method": "GET", "path": "/images/rio/1.jpeg/preset=medium"}}
    }

    Args:
        event: Lambda function URL event payload.
        context: AWS Lambda runtime context.

    Returns:
        Base64-encoded image response, or a JSON error response.
    """
    http = (event.get("requestContext") or {}).get("http") or {}
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received image transformation request",
        extra={
            "http_method": http.get("method"),
            "path": http.get("path"),
            "request_id": request_id,
            "function_name": getattr(context, "function_name", None),
            "remaining_time_ms": context.get_remaining_time_in_millis()
            if hasattr(context, "get_remaining_time_in_millis")
            else None,
        },
    )

    service = get_service()
    config = service.config

    headers = {str(k).lower(): v for k, v in (event.get("headers") or {}).items()}
    if not _is_authorized(headers, config.secret_key):
        logger.warning("Rejected request with invalid origin secret", extra={"request_id": request_id})
        return ResponseBuilder.forbidden("Request unauthorized", request_id=request_id)

    if http.get("method") != ALLOWED_METHOD:
        return ResponseBuilder.bad_request("Only GET method is supported", request_id=request_id)

    try:
        request = ImageRequest.from_path(http.get("path"))
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": sanitize_validation_errors(exc.errors()), "path": http.get("path")},
        )
        return ResponseBuilder.bad_request("Invalid image path", request_id=request_id)

    try:
        result = service.process(request.original_path, request.descriptor)

    except SourceNotFoundError:
        logger.warning(
            "Original image not found",
            extra={"original_path": request.original_path},
        )
        return ResponseBuilder.not_found("Image not found", request_id=request_id)

    except SourceFetchError as exc:
        logger.exception(
            "Error downloading original image",
            extra={"original_path": request.original_path, "details": exc.details},
        )
        return ResponseBuilder.internal_error("Error downloading original image", request_id=request_id)

    except TransformError as exc:
        logger.exception(
            "Error transforming image",
            extra={"cache_key": request.cache_key, "details": exc.details},
        )
        metrics.add_metric(name="TransformFailed", unit=MetricUnit.Count, value=1)
        return ResponseBuilder.internal_error("Error transforming image", request_id=request_id)

    if result.cache_write.status is CacheWriteStatus.FAILED:
        metrics.add_metric(name="CacheWriteFailed", unit=MetricUnit.Count, value=1)

    response_headers = {"Cache-Control": config.cache_control}
    if result.timings_ms:
        response_headers[SERVER_TIMING_HEADER] = _server_timing(result)

    return ResponseBuilder.binary_response(
        result.image.body,
        content_type=result.image.content_type,
        headers=response_headers,
    )
