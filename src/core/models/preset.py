"""Preset table for image transformations."""

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from core.models.errors import ConfigurationError
from core.utils.constants import ALLOWED_PRESETS


class ImageFormat(str, Enum):
    """Output formats a preset may select."""

    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    WEBP = "webp"
    AVIF = "avif"


class Preset(BaseModel):
    """Fixed combination of target size, output format and quality."""

    model_config = ConfigDict(frozen=True)

    name: StrictStr = Field(..., min_length=1, description="Preset name as used in requests")
    width: StrictInt = Field(..., gt=0, description="Bounding box width in pixels")
    height: StrictInt = Field(..., gt=0, description="Bounding box height in pixels")
    format: ImageFormat = Field(..., description="Output encoding")
    quality: StrictInt = Field(..., ge=0, le=100, description="Encoder quality")


def _build_table(presets: Iterable[Preset]) -> Mapping[str, Preset]:
    return MappingProxyType({preset.name: preset for preset in presets})


PRESETS: Mapping[str, Preset] = _build_table(
    [
        Preset(name="thumb", width=50, height=50, format=ImageFormat.JPEG, quality=20),
        Preset(name="small", width=256, height=256, format=ImageFormat.JPEG, quality=50),
        Preset(name="medium", width=512, height=512, format=ImageFormat.JPEG, quality=70),
        Preset(name="large", width=1024, height=1024, format=ImageFormat.JPEG, quality=80),
        Preset(name="xlarge", width=2048, height=2048, format=ImageFormat.JPEG, quality=90),
        Preset(name="small_wide", width=256, height=144, format=ImageFormat.JPEG, quality=50),
        Preset(name="medium_wide", width=512, height=288, format=ImageFormat.JPEG, quality=70),
        Preset(name="large_wide", width=1024, height=576, format=ImageFormat.JPEG, quality=80),
        Preset(name="xlarge_wide", width=2048, height=1152, format=ImageFormat.JPEG, quality=80),
        Preset(name="doordash", width=1400, height=788, format=ImageFormat.JPEG, quality=70),
    ]
)


def validate_preset_table(
    allowed: Iterable[str] = ALLOWED_PRESETS,
    table: Mapping[str, Preset] = PRESETS,
) -> None:
    """Ensure every allow-listed preset name has exactly one table entry.

    Raises:
        ConfigurationError: If a name is missing or a table entry is keyed
            under a name different from its own
    """
    missing = sorted(name for name in allowed if name not in table)
    if missing:
        raise ConfigurationError(
            message="Allowed presets missing from preset table",
            details={"missing": missing},
        )

    mismatched = sorted(key for key, preset in table.items() if key != preset.name)
    if mismatched:
        raise ConfigurationError(
            message="Preset table keys do not match preset names",
            details={"mismatched": mismatched},
        )


def get_preset(name: str | None) -> Preset | None:
    """Look up a preset by name, returning None for unknown names."""
    if not name:
        return None
    return PRESETS.get(name.lower())


validate_preset_table()
