"""
Image decode, resize and encode built on Pillow.

Resize policy: each frame is scaled to fit inside the preset's bounding box,
keeping its aspect ratio and never enlarging, with Lanczos resampling.
Source EXIF data is not written to the output; identical input and options
always encode to identical bytes.
"""

from io import BytesIO
from typing import Any

from aws_lambda_powertools import Logger
from PIL import Image, ImageFile, ImageSequence

from core.models.errors import TransformError
from core.models.image import TransformedImage
from core.models.operations import (
    DEFAULT_TRANSFORM_OPTIONS,
    TransformOptions,
    parse_descriptor,
)
from core.models.preset import get_preset
from core.utils.constants import (
    ANIMATED_FORMATS,
    LOSSY_FORMATS,
    PILLOW_FORMAT_MAP,
    PRESET_OPERATION,
)
from core.utils.mime import content_type_for_format, resolve_output_format

# Decode partially corrupt sources instead of aborting.
ImageFile.LOAD_TRUNCATED_IMAGES = True

DEFAULT_FRAME_DURATION_MS = 100

logger = Logger(UTC=True)


def resolve_options(descriptor: str) -> TransformOptions:
    """Resolve a descriptor into concrete transform options.

    ``original``, descriptors without a recognised key and unknown preset
    names all resolve to the default options: jpeg at quality 80, no resize.
    """
    operations = parse_descriptor(descriptor)
    preset_name = operations.get(PRESET_OPERATION)

    if preset_name is None:
        return DEFAULT_TRANSFORM_OPTIONS

    preset = get_preset(preset_name)
    if preset is None:
        logger.warning(
            "Unknown preset requested, using default options",
            extra={"preset": preset_name, "descriptor": descriptor},
        )
        return DEFAULT_TRANSFORM_OPTIONS

    return TransformOptions(
        width=preset.width,
        height=preset.height,
        format=preset.format.value,
        quality=preset.quality,
        preset=preset.name,
    )


def fit_within(size: tuple[int, int], box: tuple[int, int]) -> tuple[int, int]:
    """Largest size with the same aspect ratio that fits ``box`` without upscaling."""
    width, height = size
    box_width, box_height = box

    scale = min(box_width / width, box_height / height, 1.0)

    return (
        min(box_width, max(1, round(width * scale))),
        min(box_height, max(1, round(height * scale))),
    )


class ImageTransformer:
    """Applies resolved transform options to encoded image bytes."""

    def transform(self, body: bytes, descriptor: str) -> TransformedImage:
        """Decode ``body``, apply ``descriptor`` and re-encode.

        Raises:
            TransformError: If the image cannot be decoded, resized or encoded
        """
        options = resolve_options(descriptor)
        output_format = resolve_output_format(options.format)

        try:
            frames, save_info = self._decode(body)

            if options.resize_requested:
                frames = self._resize(frames, (options.width, options.height))  # type: ignore[arg-type]

            encoded, frame_count = self._encode(frames, save_info, output_format, options.quality)

        except TransformError:
            raise

        except Exception as exc:
            logger.exception(
                "Image transformation failed",
                extra={"descriptor": descriptor, "format": output_format},
            )
            raise TransformError(
                message="Unable to transform image",
                details={"descriptor": descriptor, "reason": type(exc).__name__},
            ) from exc

        width, height = frames[0].size
        logger.debug(
            "Image transformed",
            extra={
                "descriptor": descriptor,
                "format": output_format,
                "quality": options.quality,
                "width": width,
                "height": height,
                "frames": frame_count,
                "size": len(encoded),
            },
        )

        return TransformedImage(
            body=encoded,
            content_type=content_type_for_format(output_format),
            width=width,
            height=height,
            frames=frame_count,
        )

    @staticmethod
    def _decode(body: bytes) -> tuple[list[Image.Image], dict[str, Any]]:
        """Open every frame of ``body`` as an independent image."""
        with Image.open(BytesIO(body)) as source:
            save_info: dict[str, Any] = {"loop": source.info.get("loop", 0)}
            frames: list[Image.Image] = []
            durations: list[int] = []

            for frame in ImageSequence.Iterator(source):
                durations.append(int(frame.info.get("duration", DEFAULT_FRAME_DURATION_MS)))
                frames.append(frame.copy())

        if not frames:
            raise TransformError(message="Image contains no frames")

        save_info["duration"] = durations
        return frames, save_info

    @staticmethod
    def _resize(frames: list[Image.Image], box: tuple[int, int]) -> list[Image.Image]:
        target = fit_within(frames[0].size, box)
        if target == frames[0].size:
            return frames

        resized: list[Image.Image] = []
        for frame in frames:
            if frame.mode in ("P", "PA", "1"):
                frame = frame.convert("RGBA")
            elif frame.mode not in ("RGB", "RGBA", "L", "LA"):
                frame = frame.convert("RGB")
            resized.append(frame.resize(target, Image.Resampling.LANCZOS))

        return resized

    @staticmethod
    def _encode(
        frames: list[Image.Image],
        save_info: dict[str, Any],
        output_format: str,
        quality: int,
    ) -> tuple[bytes, int]:
        pillow_format = PILLOW_FORMAT_MAP[output_format]
        params: dict[str, Any] = {}

        if output_format in LOSSY_FORMATS:
            params["quality"] = quality

        animated = len(frames) > 1 and output_format in ANIMATED_FORMATS
        if not animated:
            frames = frames[:1]

        if pillow_format == "JPEG":
            frames = [frame if frame.mode in ("RGB", "L") else frame.convert("RGB") for frame in frames]

        if animated:
            params.update(
                save_all=True,
                append_images=frames[1:],
                duration=save_info["duration"][: len(frames)],
                loop=save_info["loop"],
            )

        buffer = BytesIO()
        frames[0].save(buffer, format=pillow_format, **params)
        return buffer.getvalue(), len(frames)
