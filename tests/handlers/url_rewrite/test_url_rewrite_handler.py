from types import SimpleNamespace

import pytest

from handlers.url_rewrite.handler import handler, rewrite_request


def function_event(uri: str, querystring: dict | None = None) -> dict:
    return {"version": "1.0", "request": {"method": "GET", "uri": uri, "querystring": querystring or {}}}


def edge_event(uri: str, querystring: str = "") -> dict:
    return {
        "Records": [
            {"cf": {"request": {"method": "GET", "uri": uri, "querystring": querystring, "headers": {}}}}
        ]
    }


class TestCloudFrontFunctionShape:
    def test_preset_is_normalized(self) -> None:
        request = rewrite_request(
            function_event("/images/rio/1.jpeg", {"Preset": {"value": "MEDIUM"}, "x": {"value": "1"}})
        )

        assert request["uri"] == "/images/rio/1.jpeg/preset=medium"
        assert request["querystring"] == {}

    def test_no_query_gives_original(self) -> None:
        request = rewrite_request(function_event("/images/rio/1.jpeg"))

        assert request["uri"] == "/images/rio/1.jpeg/original"

    def test_other_request_fields_are_kept(self) -> None:
        event = function_event("/a.png", {"preset": {"value": "thumb"}})

        request = rewrite_request(event)

        assert request["method"] == "GET"


class TestLambdaEdgeShape:
    @pytest.mark.parametrize(
        "querystring,expected",
        [
            ("preset=Large", "/images/rio/1.jpeg/preset=large"),
            ("utm_source=mail&PRESET=small_wide", "/images/rio/1.jpeg/preset=small_wide"),
            ("preset=unknown", "/images/rio/1.jpeg/original"),
            ("preset=", "/images/rio/1.jpeg/original"),
            ("", "/images/rio/1.jpeg/original"),
        ],
    )
    def test_raw_querystring(self, querystring: str, expected: str) -> None:
        request = rewrite_request(edge_event("/images/rio/1.jpeg", querystring))

        assert request["uri"] == expected
        assert request["querystring"] == ""


def test_handler_returns_rewritten_request() -> None:
    request = handler(
        function_event("/images/rio/1.jpeg", {"preset": {"value": "xlarge"}}),
        SimpleNamespace(),
    )

    assert request["uri"] == "/images/rio/1.jpeg/preset=xlarge"


def test_rewriting_twice_is_stable() -> None:
    first = rewrite_request(function_event("/images/rio/1.jpeg", {"preset": {"value": "thumb"}}))
    second = rewrite_request(function_event(first["uri"], {"preset": {"value": "large"}}))

    assert second["uri"] == "/images/rio/1.jpeg/preset=thumb"
