"""Pluggy hook specifications for codec extension modules.

An extension contributes serialization support for types the engine does
not know, and post-decode transforms for types it does.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pluggy

PROJECT_NAME = "codecpolicy"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class CodecHookSpec:
    """Hook specifications for the codecpolicy extension system."""

    @hookspec
    def codec_encoders(self) -> dict[type, Callable[[Any], Any]] | None:
        """Return type -> encoder mappings producing JSON-compatible values."""

    @hookspec
    def codec_transforms(self) -> dict[type, Callable[[Any], Any]] | None:
        """Return type -> transform mappings applied to decoded values."""
