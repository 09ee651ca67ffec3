"""
Viewer-request handler that normalizes image URLs before the cache lookup.

Supports both the Lambda@Edge event shape, where the query string is a raw
string, and the CloudFront Functions shape, where it is a mapping of
``{name: {"value": ...}}``.
"""

from typing import Any
from urllib.parse import parse_qsl

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.normalizer import normalize_request

logger = Logger(UTC=True)


def _extract_request(event: dict[str, Any]) -> tuple[dict[str, Any], bool]:
    """Return the CloudFront request and whether it came from Lambda@Edge."""
    records = event.get("Records")
    if records:
        return records[0]["cf"]["request"], True
    return event["request"], False


def rewrite_request(event: dict[str, Any]) -> dict[str, Any]:
    """Rewrite the request URI to its canonical form and drop the query string."""
    request, is_edge = _extract_request(event)
    querystring = request.get("querystring")

    if isinstance(querystring, str):
        query: dict[str, Any] = dict(parse_qsl(querystring, keep_blank_values=True))
    else:
        query = dict(querystring or {})

    normalized = normalize_request(request["uri"], query)

    request["uri"] = normalized.uri
    request["querystring"] = "" if is_edge else {}

    logger.debug(
        "Rewrote image request",
        extra={"uri": normalized.uri, "descriptor": normalized.descriptor},
    )

    return request


def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    return rewrite_request(event)
