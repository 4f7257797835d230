"""HTTP client layer — httpx clients bound to a CodecPolicy."""

from codecpolicy.client.client import AsyncCodecClient, CodecClient, CodecResponse
from codecpolicy.client.factory import build_async_http_client, build_http_client

__all__ = [
    "AsyncCodecClient",
    "CodecClient",
    "CodecResponse",
    "build_async_http_client",
    "build_http_client",
]
