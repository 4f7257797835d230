"""HTTP client factory — binds one CodecPolicy to one client.

The policy is shared by reference; clients never copy or modify it.
"""

from __future__ import annotations

from typing import Any

import httpx

from codecpolicy.client.client import JSON_MEDIA_TYPE, AsyncCodecClient, CodecClient
from codecpolicy.codec.policy import CodecPolicy, build_codec_policy
from codecpolicy.config.settings import CodecSettings


def _client_options(settings: CodecSettings, options: dict[str, Any]) -> dict[str, Any]:
    headers = httpx.Headers(options.pop("headers", None))
    headers.setdefault("Accept", JSON_MEDIA_TYPE)
    headers.setdefault("User-Agent", settings.http.user_agent)
    options.setdefault("timeout", settings.http.timeout)
    options.setdefault("follow_redirects", settings.http.follow_redirects)
    options["headers"] = headers
    return options


def build_http_client(
    policy: CodecPolicy | None = None,
    *,
    settings: CodecSettings | None = None,
    **options: Any,
) -> CodecClient:
    """Build a :class:`CodecClient` bound to *policy*.

    Without a policy a fresh one is built. *options* are passed to
    :class:`httpx.Client` (``base_url``, ``transport``, ``headers``, ...).
    """
    settings = settings or CodecSettings()
    if policy is None:
        policy = build_codec_policy(settings=settings)
    return CodecClient(httpx.Client(**_client_options(settings, options)), policy)


def build_async_http_client(
    policy: CodecPolicy | None = None,
    *,
    settings: CodecSettings | None = None,
    **options: Any,
) -> AsyncCodecClient:
    """Build an :class:`AsyncCodecClient` bound to *policy*."""
    settings = settings or CodecSettings()
    if policy is None:
        policy = build_codec_policy(settings=settings)
    return AsyncCodecClient(httpx.AsyncClient(**_client_options(settings, options)), policy)
