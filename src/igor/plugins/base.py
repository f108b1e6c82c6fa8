"""Base class shared by Igor plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod

from igor.types import Command, PluginDescriptor, ResponseEnvelope


class IgorPlugin(ABC):
    """One capability the host can route commands to.

    Subclasses mark `describe` and `work` with `hookimpl` so the host's
    plugin manager picks them up.
    """

    def __init__(self, name: str, description: str) -> None:
        self._name = name
        self._description = description

    def name(self) -> str:
        return self._name

    def description(self) -> str:
        return self._description

    @abstractmethod
    def describe(self) -> dict[str, str]:
        """Map trigger patterns to help text."""

    @abstractmethod
    async def work(self, command: Command) -> ResponseEnvelope:
        """Handle a command or raise NoMatchError."""

    def descriptor(self) -> PluginDescriptor:
        return PluginDescriptor(name=self.name(), description=self.description(), help_entries=self.describe())
