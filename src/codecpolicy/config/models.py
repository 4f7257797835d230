"""Pydantic configuration models with code-baked defaults.

Settings tune the HTTP client and the CSRF names. They never change the
mandatory codec rules.
"""

from __future__ import annotations

from pydantic import BaseModel


class HttpConfig(BaseModel):
    """Defaults for clients built by the HTTP factory."""

    model_config = {"frozen": True}

    timeout: float = 10.0
    user_agent: str = "codecpolicy"
    follow_redirects: bool = False


class CsrfConfig(BaseModel):
    """Double-submit header and cookie names."""

    model_config = {"frozen": True}

    header_name: str = "X-XSRF-TOKEN"
    cookie_name: str = "XSRF-TOKEN"
