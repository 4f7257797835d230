"""Tests for ExtensionManager — discovery, registration, and collection."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

import pytest

from codecpolicy.plugins import hookimpl
from codecpolicy.plugins.manager import ExtensionManager, Extensions, load_extensions

EMPTY_GROUP = "codecpolicy.tests.none"


class _DecimalPlugin:
    @hookimpl
    def codec_encoders(self) -> dict[type, Callable[[Any], Any]]:
        return {Decimal: float}


class _UtcPlugin:
    @hookimpl
    def codec_transforms(self) -> dict[type, Callable[[Any], Any]]:
        return {datetime: lambda d: d.astimezone(UTC)}


class _BrokenPlugin:
    @hookimpl
    def codec_encoders(self) -> dict[type, Callable[[Any], Any]]:
        msg = "boom"
        raise RuntimeError(msg)


class _NonDictPlugin:
    @hookimpl
    def codec_transforms(self) -> list[Any]:
        return [datetime]


class _BadEntryPlugin:
    @hookimpl
    def codec_encoders(self) -> dict[Any, Any]:
        return {"Decimal": float, Decimal: "not callable", complex: str}


class TestExtensionManager:
    def test_discover_without_entry_points(self) -> None:
        assert ExtensionManager(EMPTY_GROUP).discover() == []

    def test_register_plugin(self) -> None:
        manager = ExtensionManager(EMPTY_GROUP)
        manager.register_plugin(_DecimalPlugin(), name="decimal")
        assert manager.list_plugin_names() == ["decimal"]

    def test_register_plugin_default_name(self) -> None:
        manager = ExtensionManager(EMPTY_GROUP)
        manager.register_plugin(_DecimalPlugin())
        assert "_DecimalPlugin" in manager.list_plugin_names()

    def test_collect_merges_contributions(self) -> None:
        manager = ExtensionManager(EMPTY_GROUP)
        manager.register_plugin(_DecimalPlugin())
        manager.register_plugin(_UtcPlugin())
        extensions = manager.collect()
        assert set(extensions.names) == {"_DecimalPlugin", "_UtcPlugin"}
        assert extensions.encoders[Decimal] is float
        assert datetime in extensions.transforms

    def test_collect_is_read_only(self) -> None:
        manager = ExtensionManager(EMPTY_GROUP)
        manager.register_plugin(_DecimalPlugin())
        extensions = manager.collect()
        with pytest.raises(TypeError):
            extensions.encoders[int] = str  # type: ignore[index]

    def test_failing_plugin_is_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        manager = ExtensionManager(EMPTY_GROUP)
        manager.register_plugin(_BrokenPlugin())
        manager.register_plugin(_DecimalPlugin())
        with caplog.at_level(logging.WARNING, logger="codecpolicy.plugins.manager"):
            extensions = manager.collect()
        assert extensions.encoders == {Decimal: float}
        assert "Failed to collect codec_encoders" in caplog.text

    def test_non_dict_contribution_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        manager = ExtensionManager(EMPTY_GROUP)
        manager.register_plugin(_NonDictPlugin())
        with caplog.at_level(logging.WARNING, logger="codecpolicy.plugins.manager"):
            extensions = manager.collect()
        assert dict(extensions.transforms) == {}
        assert "non-dict" in caplog.text

    def test_invalid_entries_skipped(self) -> None:
        manager = ExtensionManager(EMPTY_GROUP)
        manager.register_plugin(_BadEntryPlugin())
        assert dict(manager.collect().encoders) == {complex: str}


class TestLoadExtensions:
    def test_includes_given_plugins(self) -> None:
        extensions = load_extensions(EMPTY_GROUP, _DecimalPlugin())
        assert extensions.names == ("_DecimalPlugin",)

    def test_empty_default(self) -> None:
        assert Extensions() == Extensions(names=(), encoders={}, transforms={})


class _PlainClass:
    created = 0

    def __init__(self) -> None:
        type(self).created += 1

    def codec_helper(self) -> None:
        pass


def _entry_point_manager(monkeypatch: pytest.MonkeyPatch, *classes: type) -> ExtensionManager:
    """Manager whose entry-point loading registers *classes* as class objects."""
    manager = ExtensionManager(EMPTY_GROUP)

    def load(group: str, name: str | None = None) -> int:
        for cls in classes:
            manager._pm.register(cls, name=cls.__name__)
        return len(classes)

    monkeypatch.setattr(manager._pm, "load_setuptools_entrypoints", load)
    return manager


class TestEntryPointClasses:
    def test_hook_class_instantiated(self, monkeypatch: pytest.MonkeyPatch) -> None:
        manager = _entry_point_manager(monkeypatch, _DecimalPlugin)
        assert manager.discover() == ["_DecimalPlugin"]
        assert isinstance(manager._pm.get_plugin("_DecimalPlugin"), _DecimalPlugin)
        assert manager.collect().encoders[Decimal] is float

    def test_class_without_hooks_not_instantiated(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(_PlainClass, "created", 0)
        manager = _entry_point_manager(monkeypatch, _PlainClass, _UtcPlugin)
        manager.discover()
        assert _PlainClass.created == 0
        assert manager._pm.get_plugin("_PlainClass") is _PlainClass
        assert list(manager.collect().transforms) == [datetime]

    def test_declares_hooks(self) -> None:
        assert ExtensionManager._declares_hooks(_UtcPlugin)
        assert not ExtensionManager._declares_hooks(_PlainClass)
