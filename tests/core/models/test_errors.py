"""
Unit tests for core.models.errors
"""

import pytest

from core.models.errors import (
    CacheWriteError,
    ConfigurationError,
    ImageServiceError,
    SourceFetchError,
    SourceNotFoundError,
    TransformError,
    ValidationError,
)


class TestImageServiceError:
    def test_base_error(self) -> None:
        err = ImageServiceError(
            message="Something went wrong",
            error_code="TEST_ERROR",
            details={"foo": "bar"},
        )

        assert err.message == "Something went wrong"
        assert err.error_code == "TEST_ERROR"
        assert err.details == {"foo": "bar"}
        assert str(err) == "Something went wrong"


@pytest.mark.parametrize(
    "error_cls,error_code",
    [
        (ValidationError, "VALIDATION_FAILED"),
        (ConfigurationError, "CONFIGURATION_INVALID"),
        (SourceFetchError, "SOURCE_FETCH_FAILED"),
        (SourceNotFoundError, "SOURCE_NOT_FOUND"),
        (TransformError, "TRANSFORM_FAILED"),
        (CacheWriteError, "CACHE_WRITE_FAILED"),
    ],
)
def test_default_error_codes(error_cls, error_code) -> None:
    err = error_cls(message="failed")

    assert isinstance(err, ImageServiceError)
    assert err.error_code == error_code
    assert err.details == {}


def test_not_found_is_a_fetch_error() -> None:
    err = SourceNotFoundError(message="Original image not found", details={"key": "a.jpg"})

    assert isinstance(err, SourceFetchError)
    assert err.details == {"key": "a.jpg"}
