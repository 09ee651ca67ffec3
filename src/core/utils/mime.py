from collections.abc import Mapping

from core.utils.constants import DEFAULT_OUTPUT_FORMAT, FORMAT_CONTENT_TYPE_MAP

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
    b"RIFF": "image/webp",
}


def detect_mime_type(file_data: bytes) -> str:
    for signature, mime in MAGIC_BYTES.items():
        if file_data.startswith(signature):
            return mime

    # ISO-BMFF brand lives after the 4-byte box size
    if file_data[4:12] in (b"ftypavif", b"ftypavis"):
        return "image/avif"

    raise ValueError("Unsupported or unknown file type")


def resolve_output_format(image_format: str | None) -> str:
    """Return a supported output format, falling back to jpeg."""
    normalized = (image_format or "").lower()
    if normalized in FORMAT_CONTENT_TYPE_MAP:
        return normalized
    return DEFAULT_OUTPUT_FORMAT


def content_type_for_format(image_format: str | None) -> str:
    """Map an output format to its MIME type; unknown formats map to image/jpeg."""
    return FORMAT_CONTENT_TYPE_MAP[resolve_output_format(image_format)]
