"""Status plugin: service checks, fan-out and command routing."""

from igor.plugins.status.plugin import StatusPlugin
from igor.plugins.status.registry import AdapterRegistry, default_registry

__all__ = ["AdapterRegistry", "StatusPlugin", "default_registry"]
