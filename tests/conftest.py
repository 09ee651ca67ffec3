"""
Pytest configuration and fixtures for image optimization tests.
Provides AWS mocking, S3 bucket fixtures and generated sample images.
"""

import os
from collections.abc import Callable
from io import BytesIO
from types import SimpleNamespace
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws
from PIL import Image

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "image-optimization")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "ImageOptimization")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.pop("AWS_ENDPOINT_URL", None)

ORIGINAL_BUCKET = "original-images"
TRANSFORMED_BUCKET = "transformed-images"
SECRET_KEY = "test-origin-secret"


@pytest.fixture(autouse=True)
def service_env(monkeypatch):
    """Environment read by ServiceConfig.from_env()."""
    monkeypatch.setenv("ORIGINAL_IMAGE_BUCKET_NAME", ORIGINAL_BUCKET)
    monkeypatch.setenv("TRANSFORMED_IMAGE_BUCKET_NAME", TRANSFORMED_BUCKET)
    monkeypatch.setenv("TRANSFORMED_IMAGE_CACHE_TTL", "max-age=31622400")
    monkeypatch.setenv("SECRET_KEY", SECRET_KEY)
    monkeypatch.delenv("LOG_TIMING", raising=False)


@pytest.fixture(autouse=True)
def reset_cached_service():
    """Handlers cache their service per process; rebuild it for every test."""
    from handlers.image_processing.handler import get_service

    get_service.cache_clear()
    yield
    get_service.cache_clear()


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


def _ensure_bucket(s3_client, bucket_name: str) -> None:
    try:
        s3_client.head_bucket(Bucket=bucket_name)
    except ClientError:
        s3_client.create_bucket(Bucket=bucket_name)


@pytest.fixture(scope="function")
def s3_buckets(s3_client):
    """
    Create the original and transformed buckets.

    moto discards both when the mock context exits.
    """
    _ensure_bucket(s3_client, ORIGINAL_BUCKET)
    _ensure_bucket(s3_client, TRANSFORMED_BUCKET)
    return s3_client


@pytest.fixture
def s3_put_original(s3_buckets) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an original image.

    Usage:
        s3_put_original("images/rio/1.jpeg", image_bytes, "image/jpeg")
    """

    def _put(key: str, body: bytes, content_type: str = "image/jpeg") -> dict[str, Any]:
        response: dict[str, Any] = s3_buckets.put_object(
            Bucket=ORIGINAL_BUCKET, Key=key, Body=body, ContentType=content_type
        )
        return response

    return _put


@pytest.fixture
def s3_get_transformed(s3_buckets) -> Callable[[str], dict[str, Any]]:
    """
    Helper to read a transformed image with its headers.

    Usage:
        obj = s3_get_transformed("images/rio/1.jpeg/preset=medium")
        obj["Body"], obj["ContentType"], obj["Metadata"]
    """

    def _get(key: str) -> dict[str, Any]:
        response: dict[str, Any] = s3_buckets.get_object(Bucket=TRANSFORMED_BUCKET, Key=key)
        return {
            "Body": response["Body"].read(),
            "ContentType": response.get("ContentType"),
            "Metadata": response.get("Metadata", {}),
        }

    return _get


@pytest.fixture
def transformed_keys(s3_buckets) -> Callable[[], list[str]]:
    """Helper listing every key in the transformed bucket."""

    def _list() -> list[str]:
        response = s3_buckets.list_objects_v2(Bucket=TRANSFORMED_BUCKET)
        return [obj["Key"] for obj in response.get("Contents", [])]

    return _list


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """
    Factory for encoded test images.

    Usage:
        data = make_image(1024, 768, "PNG")
    """

    def _make(
        width: int = 800,
        height: int = 600,
        image_format: str = "JPEG",
        mode: str = "RGB",
    ) -> bytes:
        image = Image.new(mode, (width, height))
        # gradient so encoders have real content to compress
        for x in range(0, width, max(1, width // 16)):
            for y in range(0, height, max(1, height // 16)):
                colour = (x * 255 // width, y * 255 // height, 128)
                if mode == "L":
                    image.putpixel((x, y), colour[0])
                elif mode == "RGBA":
                    image.putpixel((x, y), (*colour, 200))
                else:
                    image.putpixel((x, y), colour)

        buffer = BytesIO()
        image.save(buffer, format=image_format)
        return buffer.getvalue()

    return _make


@pytest.fixture
def sample_jpeg(make_image) -> bytes:
    """1024x768 JPEG original."""
    return make_image(1024, 768, "JPEG")


@pytest.fixture
def animated_gif() -> bytes:
    """Three-frame 600x400 animated GIF."""
    frames = [Image.new("RGB", (600, 400), colour) for colour in ("red", "green", "blue")]
    buffer = BytesIO()
    frames[0].save(
        buffer,
        format="GIF",
        save_all=True,
        append_images=frames[1:],
        duration=[80, 120, 160],
        loop=0,
    )
    return buffer.getvalue()


@pytest.fixture
def lambda_context():
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=1500,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )


@pytest.fixture
def image_request_event() -> Callable[..., dict[str, Any]]:
    """
    Factory for Lambda function URL events.

    Usage:
        event = image_request_event("/images/rio/1.jpeg/preset=medium")
    """

    def _event(
        path: str,
        *,
        method: str = "GET",
        secret: str | None = SECRET_KEY,
    ) -> dict[str, Any]:
        headers: dict[str, str] = {}
        if secret is not None:
            headers["x-origin-secret-header"] = secret

        return {
            "rawPath": path,
            "headers": headers,
            "requestContext": {"http": {"method": method, "path": path}},
        }

    return _event
