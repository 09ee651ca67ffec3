"""Explicit service configuration.

Configuration is read from the environment exactly once, at cold start,
and passed to services and adapters as an immutable object.
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from core.models.errors import ConfigurationError
from core.utils.constants import (
    DEFAULT_AWS_REGION,
    DEFAULT_CACHE_CONTROL,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_LOG_TIMING,
    ENV_ORIGINAL_IMAGE_BUCKET_NAME,
    ENV_SECRET_KEY,
    ENV_TRANSFORMED_IMAGE_BUCKET_NAME,
    ENV_TRANSFORMED_IMAGE_CACHE_TTL,
)

_TRUTHY = {"1", "true", "yes", "on"}


class ServiceConfig(BaseModel):
    """Runtime settings for the image processing function."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    original_bucket: StrictStr = Field(..., min_length=1, description="Bucket holding original images")
    transformed_bucket: StrictStr | None = Field(
        None, description="Bucket for transformed copies; caching is disabled when unset"
    )
    cache_control: StrictStr = Field(
        DEFAULT_CACHE_CONTROL, description="Cache-Control value for transformed images"
    )
    secret_key: StrictStr | None = Field(
        None,
        description="Shared secret expected in the origin secret header; requests are rejected when unset",
    )
    log_timing: StrictBool = Field(False, description="Emit per-phase timings")
    endpoint_url: StrictStr | None = Field(None, description="Override AWS endpoint (LocalStack)")
    region: StrictStr = Field(DEFAULT_AWS_REGION, description="AWS region for the S3 client")

    @property
    def caching_enabled(self) -> bool:
        return bool(self.transformed_bucket)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServiceConfig":
        """Build configuration from environment variables.

        Raises:
            ConfigurationError: If the original bucket name is not set or blank
        """
        env = os.environ if environ is None else environ

        original_bucket = (env.get(ENV_ORIGINAL_IMAGE_BUCKET_NAME) or "").strip()
        if not original_bucket:
            raise ConfigurationError(
                message=f"{ENV_ORIGINAL_IMAGE_BUCKET_NAME} environment variable is not set",
                details={"variable": ENV_ORIGINAL_IMAGE_BUCKET_NAME},
            )

        return cls(
            original_bucket=original_bucket,
            transformed_bucket=env.get(ENV_TRANSFORMED_IMAGE_BUCKET_NAME) or None,
            cache_control=env.get(ENV_TRANSFORMED_IMAGE_CACHE_TTL) or DEFAULT_CACHE_CONTROL,
            secret_key=env.get(ENV_SECRET_KEY) or None,
            log_timing=env.get(ENV_LOG_TIMING, "false").strip().lower() in _TRUTHY,
            endpoint_url=env.get(ENV_AWS_ENDPOINT_URL) or None,
            region=env.get(ENV_AWS_REGION) or DEFAULT_AWS_REGION,
        )
