"""Double-submit CSRF contract.

A protected mutation must carry the token in both a header and a cookie.
When either is missing the request fails with :class:`CsrfValidationFailure`
(HTTP 401). Comparing the two values is left to :func:`tokens_match`.
"""

from __future__ import annotations

import hmac
from collections.abc import Mapping
from http import HTTPStatus

from codecpolicy.config.settings import CodecSettings
from codecpolicy.errors import ResponseStatusError


class CsrfValidationFailure(ResponseStatusError):
    """The double-submit header/cookie pair is not both present.

    Terminal for the current request; never retried.
    """

    def __init__(self, header_name: str, cookie_name: str) -> None:
        super().__init__(
            HTTPStatus.UNAUTHORIZED.value,
            f"Expected both header '{header_name}' and cookie '{cookie_name}' to be present",
            {"header": header_name, "cookie": cookie_name},
        )
        self._header_name = header_name
        self._cookie_name = cookie_name

    @property
    def header_name(self) -> str:
        return self._header_name

    @property
    def cookie_name(self) -> str:
        return self._cookie_name


def require_csrf_tokens(
    headers: Mapping[str, str],
    cookies: Mapping[str, str],
    *,
    header_name: str | None = None,
    cookie_name: str | None = None,
    settings: CodecSettings | None = None,
) -> tuple[str, str]:
    """Return ``(header_value, cookie_value)`` or raise if either is missing.

    Names not passed explicitly come from ``settings.csrf``, or from the
    ``CODECPOLICY_CSRF__*`` environment when no settings are given. An empty
    value counts as missing.
    """
    if header_name is None or cookie_name is None:
        csrf = (settings or CodecSettings()).csrf
        header_name = header_name or csrf.header_name
        cookie_name = cookie_name or csrf.cookie_name
    header_value = headers.get(header_name)
    cookie_value = cookies.get(cookie_name)
    if not header_value or not cookie_value:
        raise CsrfValidationFailure(header_name, cookie_name)
    return header_value, cookie_value


def tokens_match(header_value: str, cookie_value: str) -> bool:
    """Constant-time comparison of the two submitted tokens."""
    return hmac.compare_digest(header_value.encode("utf-8"), cookie_value.encode("utf-8"))
