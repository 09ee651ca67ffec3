import pytest
from pydantic import ValidationError

from handlers.image_processing.models import ImageRequest


class TestImageRequest:
    def test_from_path_with_preset(self) -> None:
        request = ImageRequest.from_path("/images/rio/1.jpeg/preset=medium")

        assert request.original_path == "images/rio/1.jpeg"
        assert request.descriptor == "preset=medium"
        assert request.cache_key == "images/rio/1.jpeg/preset=medium"

    def test_from_path_original(self) -> None:
        request = ImageRequest.from_path("/images/rio/1.jpeg/original")

        assert request.original_path == "images/rio/1.jpeg"
        assert request.descriptor == "original"

    def test_from_path_without_leading_slash(self) -> None:
        request = ImageRequest.from_path("1.jpeg/original")

        assert request.original_path == "1.jpeg"

    @pytest.mark.parametrize("path", [None, "", "/", "/original", "/images/rio/1.jpeg/", "/ /original"])
    def test_invalid_paths(self, path) -> None:
        with pytest.raises(ValidationError):
            ImageRequest.from_path(path)
