"""Unified settings — env vars and code defaults in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — passed by the embedding application
  2. Env vars     — ``CODECPOLICY_*`` prefix, ``__`` for nested sections
  3. Code defaults — baked into the section models
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from codecpolicy.config.models import CsrfConfig, HttpConfig
from codecpolicy.plugins.manager import DEFAULT_GROUP


class CodecSettings(BaseSettings):
    """Settings for policy construction, HTTP clients, CSRF, and logging.

    Attributes:
        extension_group: Entry-point group scanned for codec extensions.
        verbose: Enable DEBUG-level output for ``codecpolicy`` loggers.
        log_json: Use JSON log lines instead of console output.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CODECPOLICY_",
        "env_nested_delimiter": "__",
    }

    extension_group: str = DEFAULT_GROUP
    verbose: bool = False
    log_json: bool = False

    http: HttpConfig = Field(default_factory=HttpConfig)
    csrf: CsrfConfig = Field(default_factory=CsrfConfig)
