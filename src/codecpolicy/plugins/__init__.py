"""Extension layer — codec extension modules via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Extension failures are warnings, never errors.
"""

from codecpolicy.plugins.hookspecs import hookimpl
from codecpolicy.plugins.manager import ExtensionManager, Extensions

__all__ = ["ExtensionManager", "Extensions", "hookimpl"]
