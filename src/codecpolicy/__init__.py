"""codecpolicy — one JSON codec policy for every component that marshals data."""

from codecpolicy.client.factory import build_async_http_client, build_http_client
from codecpolicy.codec.policy import CodecPolicy, build_codec_policy
from codecpolicy.config.settings import CodecSettings
from codecpolicy.domain.frozen import FrozenDict, FrozenList, FrozenSet
from codecpolicy.domain.shapes import TypeToken, generic_list_shape, generic_map_shape
from codecpolicy.errors import ResponseStatusError
from codecpolicy.security.csrf import CsrfValidationFailure

__version__ = "0.1.0"

__all__ = [
    "CodecPolicy",
    "CodecSettings",
    "CsrfValidationFailure",
    "FrozenDict",
    "FrozenList",
    "FrozenSet",
    "ResponseStatusError",
    "TypeToken",
    "__version__",
    "build_async_http_client",
    "build_codec_policy",
    "build_http_client",
    "generic_list_shape",
    "generic_map_shape",
]
