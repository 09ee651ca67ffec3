"""Shared image models passed between pipeline stages."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictBytes, StrictStr

from core.models.operations import build_cache_key


class SourceImage(BaseModel):
    """Original image bytes as fetched from the source bucket."""

    model_config = ConfigDict(frozen=True)

    key: StrictStr = Field(..., description="Source object key")
    body: StrictBytes = Field(..., description="Raw image bytes")
    content_type: StrictStr = Field(..., description="Declared MIME type of the source object")


class TransformedImage(BaseModel):
    """Encoded output of a transformation."""

    model_config = ConfigDict(frozen=True)

    body: StrictBytes = Field(..., description="Encoded image bytes")
    content_type: StrictStr = Field(..., description="MIME type of the encoded bytes")
    width: int = Field(..., description="Output width in pixels")
    height: int = Field(..., description="Output height in pixels")
    frames: int = Field(1, description="Number of encoded frames")


class CacheWriteStatus(str, Enum):
    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


class CacheWriteOutcome(BaseModel):
    """Result of the best-effort cache write, independent of the response."""

    model_config = ConfigDict(frozen=True)

    status: CacheWriteStatus
    cache_key: StrictStr | None = None
    error_code: StrictStr | None = None


class ProcessingResult(BaseModel):
    """Outcome of a full fetch, transform and cache-write run."""

    model_config = ConfigDict(frozen=True)

    original_path: StrictStr
    descriptor: StrictStr
    image: TransformedImage
    cache_write: CacheWriteOutcome
    timings_ms: dict[str, float] = Field(default_factory=dict)

    @property
    def cache_key(self) -> str:
        return build_cache_key(self.original_path, self.descriptor)
