"""Status-carrying errors translated to HTTP responses at the boundary.

The core raises these; only :mod:`codecpolicy.security.responses` knows
how they become transport responses.
"""

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from types import MappingProxyType
from typing import Any


class ResponseStatusError(Exception):
    """An error tagged with the HTTP status it should produce.

    Immutable once raised: the status, message and detail are read-only.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self._status_code = status_code
        self._message = message
        self._detail = MappingProxyType(dict(detail or {}))

    @property
    def status_code(self) -> int:
        """HTTP status for the response."""
        return self._status_code

    @property
    def message(self) -> str:
        """Human-readable explanation rendered in the response body."""
        return self._message

    @property
    def detail(self) -> Mapping[str, Any]:
        """Structured context rendered alongside the message."""
        return self._detail

    @property
    def reason(self) -> str:
        """Standard reason phrase for :attr:`status_code`."""
        try:
            return HTTPStatus(self.status_code).phrase
        except ValueError:
            return "Unknown"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.status_code}, {self.message!r})"
