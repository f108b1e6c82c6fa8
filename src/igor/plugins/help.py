"""Lists every trigger the registered plugins understand."""

from __future__ import annotations

from collections.abc import Callable

from igor.errors import NoMatchError
from igor.hookspecs import hookimpl
from igor.plugins.base import IgorPlugin
from igor.types import Command, PluginDescriptor, ResponseEnvelope, ResultRecord

HELP_TRIGGER = "help"


class HelpPlugin(IgorPlugin):
    def __init__(self, catalog: Callable[[], list[PluginDescriptor]]) -> None:
        super().__init__(name="help", description="Igor explains what it can do")
        self._catalog = catalog

    @hookimpl
    def describe(self) -> dict[str, str]:
        return {HELP_TRIGGER: "Show every command Igor understands"}

    @hookimpl
    async def work(self, command: Command) -> ResponseEnvelope:
        if command.trigger != HELP_TRIGGER or command.args:
            raise NoMatchError(f"not a help command: {command.raw!r}")

        response = ResponseEnvelope(headline="I can do the following:")
        for descriptor in self._catalog():
            lines = [f"{trigger}: {text}" for trigger, text in sorted(descriptor.help_entries.items())]
            response.add_record(
                ResultRecord(title=descriptor.name, body="\n".join(lines), preceding_context=descriptor.description)
            )
        return response
