"""Tests for CodecSettings — env vars and code defaults."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from codecpolicy.config.settings import CodecSettings


class TestCodecSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CODECPOLICY_EXTENSION_GROUP", raising=False)
        settings = CodecSettings()
        assert settings.extension_group == "codecpolicy.extensions"
        assert settings.http.timeout == 10.0
        assert settings.http.follow_redirects is False
        assert settings.csrf.header_name == "X-XSRF-TOKEN"
        assert settings.csrf.cookie_name == "XSRF-TOKEN"
        assert settings.verbose is False

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CODECPOLICY_VERBOSE", "true")
        monkeypatch.setenv("CODECPOLICY_HTTP__TIMEOUT", "3.5")
        monkeypatch.setenv("CODECPOLICY_CSRF__HEADER_NAME", "X-CSRF")
        settings = CodecSettings()
        assert settings.verbose is True
        assert settings.http.timeout == 3.5
        assert settings.csrf.header_name == "X-CSRF"
        assert settings.csrf.cookie_name == "XSRF-TOKEN"

    def test_init_kwargs_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CODECPOLICY_LOG_JSON", "false")
        assert CodecSettings(log_json=True).log_json is True

    def test_frozen(self) -> None:
        settings = CodecSettings()
        with pytest.raises(ValidationError):
            settings.verbose = True  # type: ignore[misc]
