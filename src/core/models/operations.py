"""Operation descriptors and resolved transform options."""

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from core.utils.constants import (
    ALLOWED_PRESETS,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_OUTPUT_QUALITY,
    KEY_VALUE_SEPARATOR,
    OPERATION_ORDER,
    OPERATION_SEPARATOR,
    ORIGINAL_DESCRIPTOR,
    PRESET_OPERATION,
)

# Accepted values per recognised operation key.
ALLOWED_OPERATION_VALUES: Mapping[str, frozenset[str]] = {
    PRESET_OPERATION: ALLOWED_PRESETS,
}


class TransformOptions(BaseModel):
    """Resolved parameters for a single transformation."""

    model_config = ConfigDict(frozen=True)

    width: StrictInt | None = Field(None, gt=0)
    height: StrictInt | None = Field(None, gt=0)
    format: str = DEFAULT_OUTPUT_FORMAT
    quality: StrictInt = Field(DEFAULT_OUTPUT_QUALITY, ge=0, le=100)
    preset: str | None = None

    @property
    def resize_requested(self) -> bool:
        return self.width is not None and self.height is not None


DEFAULT_TRANSFORM_OPTIONS = TransformOptions()


def build_descriptor(operations: Mapping[str, str]) -> str:
    """Join accepted operations into a canonical descriptor.

    Keys are emitted in the declared order regardless of the mapping's
    order; unknown keys are ignored. An empty result yields ``original``.
    """
    parts = [
        f"{key}{KEY_VALUE_SEPARATOR}{operations[key]}"
        for key in OPERATION_ORDER
        if operations.get(key)
    ]
    if not parts:
        return ORIGINAL_DESCRIPTOR
    return OPERATION_SEPARATOR.join(parts)


def parse_descriptor(descriptor: str) -> dict[str, str]:
    """Split a descriptor such as ``preset=medium`` into a mapping.

    ``original`` and tokens without a separator produce no entries.
    """
    operations: dict[str, str] = {}
    if not descriptor or descriptor == ORIGINAL_DESCRIPTOR:
        return operations

    for token in descriptor.split(OPERATION_SEPARATOR):
        key, sep, value = token.partition(KEY_VALUE_SEPARATOR)
        if not sep or not key:
            continue
        operations[key] = value

    return operations


def is_canonical_descriptor(segment: str) -> bool:
    """Return True when ``segment`` is exactly what build_descriptor would emit."""
    if segment == ORIGINAL_DESCRIPTOR:
        return True

    operations = parse_descriptor(segment)
    if not operations:
        return False

    for key, value in operations.items():
        if value not in ALLOWED_OPERATION_VALUES.get(key, frozenset()):
            return False

    return build_descriptor(operations) == segment


def build_cache_key(original_path: str, descriptor: str) -> str:
    return f"{original_path}/{descriptor}"
