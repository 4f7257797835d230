"""httpx clients whose JSON bodies pass only through a CodecPolicy.

Request bodies are given as ``body=`` and encoded with the policy.
Response bodies are read with :meth:`CodecResponse.body`, which decodes
with the same policy. httpx's own ``json=`` encoder is refused.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from codecpolicy.domain.shapes import generic_map_shape

if TYPE_CHECKING:
    from codecpolicy.codec.policy import CodecPolicy

JSON_MEDIA_TYPE = "application/json"

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class CodecResponse:
    """An httpx response whose body is decoded by the client's policy."""

    __slots__ = ("_policy", "_response")

    def __init__(self, response: httpx.Response, policy: CodecPolicy) -> None:
        self._response = response
        self._policy = policy

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self._response.headers

    def raise_for_status(self) -> CodecResponse:
        """Raise ``httpx.HTTPStatusError`` for 4xx/5xx responses."""
        self._response.raise_for_status()
        return self

    def body(self, shape: Any = None) -> Any:
        """Decode the response body into *shape* (default: generic map).

        An empty body decodes as JSON ``null`` would, so collection shapes
        yield an empty read-only container.
        """
        target = generic_map_shape() if shape is None else shape
        content = self._response.content
        if not content.strip():
            return self._policy.from_builtins(None, target)
        return self._policy.decode(content, target)


class _CodecClientBase:
    """Request preparation shared by the sync and async clients."""

    def __init__(self, policy: CodecPolicy) -> None:
        self._policy = policy

    @property
    def policy(self) -> CodecPolicy:
        """The policy bound to this client at construction."""
        return self._policy

    def _prepare(self, body: Any, kwargs: dict[str, Any]) -> dict[str, Any]:
        if "json" in kwargs:
            msg = "Pass request bodies as body=; json= bypasses the codec policy"
            raise TypeError(msg)
        if body is not _UNSET:
            headers = httpx.Headers(kwargs.pop("headers", None))
            headers.setdefault("Content-Type", JSON_MEDIA_TYPE)
            kwargs["headers"] = headers
            kwargs["content"] = self._policy.encode(body)
        return kwargs

    def _wrap(self, method: str, url: httpx.URL | str, response: httpx.Response) -> CodecResponse:
        logger.debug("%s %s -> %d", method, url, response.status_code)
        return CodecResponse(response, self._policy)


class CodecClient(_CodecClientBase):
    """Synchronous JSON client over :class:`httpx.Client`."""

    def __init__(self, http: httpx.Client, policy: CodecPolicy) -> None:
        super().__init__(policy)
        self._http = http

    def request(
        self,
        method: str,
        url: httpx.URL | str,
        *,
        body: Any = _UNSET,
        **kwargs: Any,
    ) -> CodecResponse:
        """Send a request, encoding *body* with the policy when given."""
        response = self._http.request(method, url, **self._prepare(body, kwargs))
        return self._wrap(method, url, response)

    def get(self, url: httpx.URL | str, **kwargs: Any) -> CodecResponse:
        return self.request("GET", url, **kwargs)

    def delete(self, url: httpx.URL | str, **kwargs: Any) -> CodecResponse:
        return self.request("DELETE", url, **kwargs)

    def post(self, url: httpx.URL | str, *, body: Any = _UNSET, **kwargs: Any) -> CodecResponse:
        return self.request("POST", url, body=body, **kwargs)

    def put(self, url: httpx.URL | str, *, body: Any = _UNSET, **kwargs: Any) -> CodecResponse:
        return self.request("PUT", url, body=body, **kwargs)

    def patch(self, url: httpx.URL | str, *, body: Any = _UNSET, **kwargs: Any) -> CodecResponse:
        return self.request("PATCH", url, body=body, **kwargs)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> CodecClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class AsyncCodecClient(_CodecClientBase):
    """Asynchronous JSON client over :class:`httpx.AsyncClient`.

    Many requests may be awaited concurrently; they share the policy
    without coordination.
    """

    def __init__(self, http: httpx.AsyncClient, policy: CodecPolicy) -> None:
        super().__init__(policy)
        self._http = http

    async def request(
        self,
        method: str,
        url: httpx.URL | str,
        *,
        body: Any = _UNSET,
        **kwargs: Any,
    ) -> CodecResponse:
        """Send a request, encoding *body* with the policy when given."""
        response = await self._http.request(method, url, **self._prepare(body, kwargs))
        return self._wrap(method, url, response)

    async def get(self, url: httpx.URL | str, **kwargs: Any) -> CodecResponse:
        return await self.request("GET", url, **kwargs)

    async def delete(self, url: httpx.URL | str, **kwargs: Any) -> CodecResponse:
        return await self.request("DELETE", url, **kwargs)

    async def post(
        self, url: httpx.URL | str, *, body: Any = _UNSET, **kwargs: Any
    ) -> CodecResponse:
        return await self.request("POST", url, body=body, **kwargs)

    async def put(
        self, url: httpx.URL | str, *, body: Any = _UNSET, **kwargs: Any
    ) -> CodecResponse:
        return await self.request("PUT", url, body=body, **kwargs)

    async def patch(
        self, url: httpx.URL | str, *, body: Any = _UNSET, **kwargs: Any
    ) -> CodecResponse:
        return await self.request("PATCH", url, body=body, **kwargs)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> AsyncCodecClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
