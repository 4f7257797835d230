"""Codec layer — the CodecPolicy engine and its shape registry."""

from codecpolicy.codec.policy import CodecPolicy, build_codec_policy
from codecpolicy.codec.registry import ShapeRegistry

__all__ = ["CodecPolicy", "ShapeRegistry", "build_codec_policy"]
