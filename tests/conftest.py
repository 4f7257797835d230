"""Shared pytest fixtures and sample models for codecpolicy tests."""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import BaseModel, Field

from codecpolicy.codec.policy import CodecPolicy, build_codec_policy
from codecpolicy.config.settings import CodecSettings
from codecpolicy.plugins.manager import Extensions


class Address(BaseModel):
    """Nested model used in decode tests."""

    model_config = {"frozen": True}

    street: str | None = None
    tags: list[str] = Field(default_factory=list)


class Customer(BaseModel):
    """Model with every collection kind; rejects extras on its own."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str | None = None
    nickname: str | None = None
    emails: list[str]
    roles: set[str] = Field(default_factory=set)
    attributes: dict[str, list[int]] | None = None
    addresses: list[Address] = Field(default_factory=list)
    joined: datetime | None = None


@pytest.fixture
def settings() -> CodecSettings:
    """Settings pointing at an entry-point group nothing installs."""
    return CodecSettings(extension_group="codecpolicy.tests.none")


@pytest.fixture
def policy() -> CodecPolicy:
    """Policy with no extension modules."""
    return build_codec_policy(extensions=Extensions())
