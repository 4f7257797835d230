"""Extension discovery and loading.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints
in the ``codecpolicy.extensions`` group.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import pluggy

from codecpolicy.plugins.hookspecs import PROJECT_NAME, CodecHookSpec

DEFAULT_GROUP = "codecpolicy.extensions"

logger = logging.getLogger(__name__)


def _frozen_mapping() -> Mapping[type, Callable[[Any], Any]]:
    return MappingProxyType({})


@dataclass(frozen=True)
class Extensions:
    """Everything the loaded extension modules contribute to a policy."""

    names: tuple[str, ...] = ()
    encoders: Mapping[type, Callable[[Any], Any]] = field(default_factory=_frozen_mapping)
    transforms: Mapping[type, Callable[[Any], Any]] = field(default_factory=_frozen_mapping)


class ExtensionManager:
    """Manages extension discovery, registration, and contribution collection."""

    def __init__(self, group: str = DEFAULT_GROUP) -> None:
        self._group = group
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(CodecHookSpec)

    def discover(self) -> list[str]:
        """Load extensions from entry points and return registered names."""
        try:
            self._pm.load_setuptools_entrypoints(self._group)
        except Exception:
            logger.warning("Failed to load codec extensions from %s", self._group, exc_info=True)
        self._normalize_plugin_instances()
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register an extension instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered codec extension: %s", resolved_name)

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered extensions."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def collect(self) -> Extensions:
        """Merge the contributions of every registered extension."""
        return Extensions(
            names=tuple(self.list_plugin_names()),
            encoders=MappingProxyType(self._collect("codec_encoders")),
            transforms=MappingProxyType(self._collect("codec_transforms")),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _collect(self, hook_name: str) -> dict[type, Callable[[Any], Any]]:
        merged: dict[type, Callable[[Any], Any]] = {}
        for plugin in self._pm.get_plugins():
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            hook = getattr(plugin, hook_name, None)
            if hook is None:
                continue
            try:
                contributed = hook()
            except Exception:
                logger.warning(
                    "Failed to collect %s from codec extension %s",
                    hook_name,
                    plugin_name,
                    exc_info=True,
                )
                continue
            if contributed is None:
                continue
            if not isinstance(contributed, dict):
                logger.warning(
                    "Codec extension %s returned non-dict %s",
                    plugin_name,
                    hook_name,
                )
                continue
            for target, func in contributed.items():
                if not isinstance(target, type) or not callable(func):
                    logger.warning(
                        "Skipping %s entry %r from codec extension %s",
                        hook_name,
                        target,
                        plugin_name,
                    )
                    continue
                merged[target] = func
        return merged

    def _normalize_plugin_instances(self) -> None:
        """Replace registered extension classes with instantiated objects.

        Entry-point loading may register a class directly. Hook calls
        against class objects leave ``self`` unbound. Classes that declare
        no hook implementations are left as registered.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin) or not self._declares_hooks(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate codec extension %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated codec extension: %s", plugin_name)

    @staticmethod
    def _declares_hooks(cls: type) -> bool:
        """Whether *cls* has a public method marked with ``@hookimpl``."""
        marker = f"{PROJECT_NAME}_impl"
        return any(
            callable(member) and getattr(member, marker, None)
            for name, member in inspect.getmembers(cls)
            if not name.startswith("_")
        )


def load_extensions(group: str = DEFAULT_GROUP, *plugins: object) -> Extensions:
    """Discover entry-point extensions, add *plugins*, and collect them."""
    manager = ExtensionManager(group)
    manager.discover()
    for plugin in plugins:
        manager.register_plugin(plugin)
    return manager.collect()
