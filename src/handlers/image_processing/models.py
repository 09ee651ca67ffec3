from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    field_validator,
)

from core.models.operations import build_cache_key


class ImageRequest(BaseModel):
    """Validation model for a rewritten image path.

    The path has the form ``/{original_path}/{descriptor}``, for example
    ``/images/rio/1.jpeg/preset=medium`` or ``/images/rio/1.jpeg/original``.
    """

    model_config = ConfigDict(frozen=True)

    original_path: StrictStr = Field(
        ...,
        min_length=1,
        description="Key of the original image in the source bucket",
    )

    descriptor: StrictStr = Field(
        ...,
        min_length=1,
        description="Canonical operation descriptor",
    )

    @field_validator("original_path", "descriptor")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @classmethod
    def from_path(cls, path: str | None) -> "ImageRequest":
        segments = (path or "").split("/")
        descriptor = segments.pop() if segments else ""
        # drop the empty segment produced by the leading slash
        if segments and segments[0] == "":
            segments.pop(0)

        return cls(original_path="/".join(segments), descriptor=descriptor)

    @property
    def cache_key(self) -> str:
        return build_cache_key(self.original_path, self.descriptor)
