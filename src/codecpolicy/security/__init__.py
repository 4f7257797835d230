"""Security boundary — the CSRF double-submit failure and its response mapping."""

from codecpolicy.security.csrf import CsrfValidationFailure, require_csrf_tokens, tokens_match
from codecpolicy.security.responses import error_response, install_error_handlers

__all__ = [
    "CsrfValidationFailure",
    "error_response",
    "install_error_handlers",
    "require_csrf_tokens",
    "tokens_match",
]
