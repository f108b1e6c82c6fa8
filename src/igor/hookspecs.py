"""Pluggy hook namespace and framework hook specifications."""

from __future__ import annotations

from typing import Any

import pluggy

from igor.types import Command, ResponseEnvelope

IGOR_HOOK_NAMESPACE = "igor"
hookspec = pluggy.HookspecMarker(IGOR_HOOK_NAMESPACE)
hookimpl = pluggy.HookimplMarker(IGOR_HOOK_NAMESPACE)


class IgorHookSpecs:
    """Hook contract for Igor plugins."""

    @hookspec
    def describe(self) -> dict[str, str]:
        """Map each trigger pattern the plugin handles to its help text."""

    @hookspec
    def work(self, command: Command) -> ResponseEnvelope:
        """Handle one command, raising NoMatchError when it is not addressed to this plugin."""

    @hookspec
    def register_cli_commands(self, app: Any) -> None:
        """Register CLI commands onto the root Typer application."""

    @hookspec
    def on_error(self, stage: str, error: Exception, command: Command | None) -> None:
        """Observe framework errors from any stage."""
