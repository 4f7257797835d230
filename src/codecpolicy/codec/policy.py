"""CodecPolicy — the single JSON serialization and deserialization engine.

Built once, shared by reference. The rules below are mandatory and cannot be
turned off by settings or extensions:

Serialization:
- Mapping entries and model fields with empty values are omitted
- Dates, times, and durations are written as ISO 8601 text

Deserialization:
- Unknown fields are ignored
- An empty string decodes to None
- An absent or null list, set, or mapping decodes to an empty one
- Every decoded list, set, and mapping is read-only, recursively

INVARIANT: a CodecPolicy is never mutated after construction.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError, from_json, to_json, to_jsonable_python

from codecpolicy.codec.normalize import normalize
from codecpolicy.codec.registry import ShapeRegistry
from codecpolicy.config.settings import CodecSettings
from codecpolicy.domain.rules import prune_empty
from codecpolicy.domain.shapes import TypeToken
from codecpolicy.plugins.manager import Extensions, load_extensions

Encoder = Callable[[Any], Any]

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=256)
def _adapter(shape: Any) -> TypeAdapter[Any]:
    return TypeAdapter(shape)


def _target(shape: Any) -> Any:
    return shape.shape if isinstance(shape, TypeToken) else shape


@dataclass(frozen=True, slots=True)
class CodecPolicy:
    """Immutable bundle of JSON encode and decode rules.

    Parameters:
        registry: Post-decode transformations, core and extension provided.
        encoders: Fallback encoders for types the engine cannot serialize.
        extensions: Names of the extension modules that were loaded.
    """

    registry: ShapeRegistry = field(default_factory=ShapeRegistry)
    encoders: Mapping[type, Encoder] = field(default_factory=lambda: MappingProxyType({}))
    extensions: tuple[str, ...] = ()

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_builtins(self, value: Any) -> Any:
        """Convert *value* to JSON-compatible builtins with empties omitted."""
        data = to_jsonable_python(
            value,
            by_alias=True,
            timedelta_mode="iso8601",
            bytes_mode="base64",
            fallback=self._fallback,
        )
        return prune_empty(data)

    def encode(self, value: Any) -> bytes:
        """Serialize *value* to JSON bytes."""
        return to_json(self.to_builtins(value))

    def _fallback(self, value: Any) -> Any:
        for cls in type(value).__mro__:
            encoder = self.encoders.get(cls)
            if encoder is not None:
                return encoder(value)
        msg = f"Unable to serialize unknown type: {type(value)!r}"
        raise PydanticSerializationError(msg)

    # ------------------------------------------------------------------
    # Deserialization
    # ------------------------------------------------------------------

    def from_builtins(self, value: Any, shape: Any) -> Any:
        """Validate builtin *value* against *shape* under the policy rules."""
        target = _target(shape)
        validated = _adapter(target).validate_python(normalize(target, value))
        return self.registry.apply(target, validated)

    def decode(self, data: bytes | bytearray | str, shape: Any) -> Any:
        """Parse JSON *data* and decode it into *shape*.

        Malformed JSON raises the engine's ``ValueError``; a document that
        does not fit *shape* raises ``pydantic.ValidationError``.
        """
        return self.from_builtins(from_json(data), shape)


def build_codec_policy(
    *,
    settings: CodecSettings | None = None,
    extensions: Extensions | None = None,
) -> CodecPolicy:
    """Build a fresh, fully configured :class:`CodecPolicy`.

    Extension modules are discovered from the settings' entry-point group
    unless *extensions* is given. Each call returns a new, independent
    policy with identical rules.
    """
    if extensions is None:
        settings = settings or CodecSettings()
        extensions = load_extensions(settings.extension_group)
    if extensions.names:
        logger.debug("Codec extensions loaded: %s", ", ".join(extensions.names))
    return CodecPolicy(
        registry=ShapeRegistry(extensions.transforms),
        encoders=MappingProxyType(dict(extensions.encoders)),
        extensions=extensions.names,
    )
