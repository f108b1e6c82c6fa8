"""Hook-first Igor host runtime."""

from __future__ import annotations

from typing import Any

import pluggy
from loguru import logger

from igor.commands import parse_command
from igor.config import Settings
from igor.errors import ConfigurationError, IgorError, NoMatchError
from igor.hook_runtime import HookRuntime
from igor.hookspecs import IGOR_HOOK_NAMESPACE, IgorHookSpecs
from igor.plugins.base import IgorPlugin
from igor.types import PluginDescriptor, ResponseEnvelope, ResultRecord, Severity

ENTRY_POINT_GROUP = "igor"
NO_MATCH_TEXT = "I don't understand that command. Try `help` to see what I can do."
FAILURE_TEXT = "Something went wrong while handling that command."


class IgorFramework:
    """Routes text commands to the first plugin that accepts them."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self._plugin_manager = pluggy.PluginManager(IGOR_HOOK_NAMESPACE)
        self._plugin_manager.add_hookspecs(IgorHookSpecs)
        self._hook_runtime = HookRuntime(self._plugin_manager)
        self._failed_plugins: dict[str, str] = {}

    @property
    def plugins(self) -> list[IgorPlugin]:
        return [plugin for _, plugin in self._plugin_manager.list_name_plugin() if isinstance(plugin, IgorPlugin)]

    @property
    def failed_plugins(self) -> dict[str, str]:
        return dict(self._failed_plugins)

    def load_plugins(self) -> None:
        """Register builtin plugins, then any installed through entry points."""

        from igor.builtin.cli import CliPlugin
        from igor.plugins.help import HelpPlugin
        from igor.plugins.status import StatusPlugin

        self.register(StatusPlugin(self.settings))
        self.register(HelpPlugin(self.descriptors))
        self._plugin_manager.register(CliPlugin(), name="builtin:cli")
        try:
            self._plugin_manager.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception as exc:  # pragma: no cover - depends on installed distributions
            self._failed_plugins[ENTRY_POINT_GROUP] = str(exc)
            logger.opt(exception=True).warning("plugin.entrypoints_failed group={}", ENTRY_POINT_GROUP)

    def register(self, plugin: IgorPlugin) -> None:
        name = plugin.name()
        if self._plugin_manager.has_plugin(name):
            raise ConfigurationError(f"duplicate plugin name: {name}")
        self._plugin_manager.register(plugin, name=name)
        logger.debug("plugin.registered name={}", name)

    def register_cli_commands(self, app: Any) -> None:
        """Ask plugins to register CLI commands."""

        self._hook_runtime.call_many_sync("register_cli_commands", app=app)

    async def dispatch(self, text: str) -> ResponseEnvelope:
        """Hand one command to the plugins, raising NoMatchError when none accepts it."""

        command = parse_command(text)
        try:
            return await self._hook_runtime.call_until_match("work", accept=_is_reply, command=command)
        except NoMatchError:
            raise NoMatchError(f"no plugin handled {text!r}") from None

    async def respond(self, text: str) -> ResponseEnvelope:
        """Like dispatch, but turn failures into a private reply for the caller."""

        try:
            return await self.dispatch(text)
        except NoMatchError:
            logger.info("command.no_match text={!r}", text)
            return ResponseEnvelope(headline=NO_MATCH_TEXT)
        except IgorError as exc:
            logger.warning("command.failed text={!r} error={}", text, exc)
            return ResponseEnvelope(
                headline=FAILURE_TEXT,
                records=[ResultRecord(title="Error", body=str(exc), severity=Severity.DANGER)],
            )
        except Exception:
            logger.opt(exception=True).error("command.crashed text={!r}", text)
            return ResponseEnvelope(headline=FAILURE_TEXT)

    def descriptors(self) -> list[PluginDescriptor]:
        return [plugin.descriptor() for plugin in self.plugins]

    def hook_report(self) -> dict[str, list[str]]:
        """Return hook implementation summary for diagnostics."""

        return self._hook_runtime.hook_report()


def _is_reply(value: Any) -> bool:
    return isinstance(value, ResponseEnvelope) and not value.is_empty()
