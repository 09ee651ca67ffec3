import pytest
from botocore.exceptions import ClientError

from core.config import ServiceConfig
from core.infrastructure.adapters.s3_adapter import S3Adapter, create_s3_client
from core.infrastructure.aws.s3_transformed_storage import S3TransformedStorage
from core.models.errors import CacheWriteError


@pytest.fixture
def storage(s3_buckets) -> S3TransformedStorage:
    client = create_s3_client(ServiceConfig.from_env())
    return S3TransformedStorage(S3Adapter("transformed-images", client))


class TestS3TransformedStorage:
    def test_store_transformed_success(self, storage, s3_get_transformed) -> None:
        storage.store_transformed(
            key="images/rio/1.jpeg/preset=medium",
            body=b"jpeg-bytes",
            content_type="image/jpeg",
            cache_control="max-age=31622400",
        )

        stored = s3_get_transformed("images/rio/1.jpeg/preset=medium")

        assert stored["Body"] == b"jpeg-bytes"
        assert stored["ContentType"] == "image/jpeg"
        assert stored["Metadata"] == {"cache-control": "max-age=31622400"}

    def test_client_error_raises_cache_write_error(self, monkeypatch, storage) -> None:
        def raise_error(**_):
            raise ClientError({"Error": {"Code": "SlowDown"}}, "PutObject")

        monkeypatch.setattr(storage._s3._client, "put_object", raise_error)

        with pytest.raises(CacheWriteError) as exc:
            storage.store_transformed(
                key="a.jpg/original",
                body=b"x",
                content_type="image/jpeg",
                cache_control="max-age=1",
            )

        assert exc.value.details == {"key": "a.jpg/original", "error_code": "SlowDown"}

    def test_missing_bucket_raises_cache_write_error(self, s3_client) -> None:
        client = create_s3_client(ServiceConfig.from_env())
        storage = S3TransformedStorage(S3Adapter("bucket-that-does-not-exist", client))

        with pytest.raises(CacheWriteError):
            storage.store_transformed(
                key="a.jpg/original",
                body=b"x",
                content_type="image/jpeg",
                cache_control="max-age=1",
            )
