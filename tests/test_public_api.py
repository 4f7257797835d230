"""Tests for the top-level package exports."""

from __future__ import annotations

import json

import httpx

import codecpolicy
from codecpolicy.plugins.manager import Extensions


class TestPublicApi:
    def test_generic_shapes_are_singletons(self) -> None:
        assert codecpolicy.generic_map_shape() is codecpolicy.generic_map_shape()
        assert codecpolicy.generic_list_shape() is codecpolicy.generic_list_shape()

    def test_build_and_wire(self) -> None:
        policy = codecpolicy.build_codec_policy(extensions=Extensions())

        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content) == {"keep": 1}
            return httpx.Response(200, content=b'{"name": "", "tags": null}')

        transport = httpx.MockTransport(handler)
        with codecpolicy.build_http_client(policy, transport=transport) as client:
            body = client.post("https://example.test/", body={"keep": 1, "drop": ""}).body()
        assert body == {"name": None, "tags": None}

    def test_csrf_failure_exported(self) -> None:
        failure = codecpolicy.CsrfValidationFailure("X-H", "c")
        assert isinstance(failure, codecpolicy.ResponseStatusError)
        assert failure.status_code == 401

    def test_version(self) -> None:
        assert codecpolicy.__version__ == "0.1.0"
