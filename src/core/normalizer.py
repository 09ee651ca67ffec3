"""
Request normalization for image delivery.

Maps an inbound URI and its query parameters onto a canonical path of the
form ``/{original_path}/{descriptor}`` so that cache lookups by path are
stable regardless of parameter order, casing or unsupported parameters.
"""

from collections.abc import Mapping
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, StrictStr

from core.models.operations import (
    ALLOWED_OPERATION_VALUES,
    build_descriptor,
    is_canonical_descriptor,
)

logger = Logger(UTC=True)


class NormalizedRequest(BaseModel):
    """Rewritten request emitted by the normalizer."""

    model_config = ConfigDict(frozen=True)

    uri: StrictStr = Field(..., description="Rewritten URI ending with the descriptor")
    descriptor: StrictStr = Field(..., description="Canonical operation descriptor")
    querystring: dict[str, Any] = Field(default_factory=dict)


def _extract_value(raw: Any) -> str | None:
    """Accept plain strings and edge-function ``{"value": ...}`` entries."""
    if isinstance(raw, Mapping):
        raw = raw.get("value")
    if isinstance(raw, str):
        return raw
    return None


def normalize_operations(query: Mapping[str, Any] | None) -> dict[str, str]:
    """Keep only recognised parameters with allow-listed values, lower-cased."""
    operations: dict[str, str] = {}

    for name, raw in (query or {}).items():
        key = str(name).lower()
        allowed = ALLOWED_OPERATION_VALUES.get(key)
        if allowed is None:
            continue

        value = _extract_value(raw)
        if not value:
            continue

        value = value.lower()
        if value in allowed:
            operations[key] = value

    return operations


def normalize_request(uri: str, query: Mapping[str, Any] | None = None) -> NormalizedRequest:
    """Rewrite ``uri`` so its last segment is a canonical descriptor.

    Paths that already end with a canonical descriptor are returned
    unchanged so normalizing twice never appends a second segment. Query
    parameters are always dropped from the result.
    """
    last_segment = uri.rsplit("/", 1)[-1]
    if is_canonical_descriptor(last_segment):
        logger.debug("Request already normalized", extra={"uri": uri})
        return NormalizedRequest(uri=uri, descriptor=last_segment)

    descriptor = build_descriptor(normalize_operations(query))

    logger.debug(
        "Normalized image request",
        extra={"uri": uri, "descriptor": descriptor},
    )

    return NormalizedRequest(uri=f"{uri}/{descriptor}", descriptor=descriptor)
