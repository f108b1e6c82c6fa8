"""Hook execution runtime with error reporting and no-match fall-through."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

import pluggy
from loguru import logger

from igor.errors import NoMatchError
from igor.types import Command


class HookRuntime:
    """Thin wrapper around pluggy hook execution."""

    def __init__(self, plugin_manager: pluggy.PluginManager) -> None:
        self._plugin_manager = plugin_manager

    async def call_until_match(
        self,
        hook_name: str,
        *,
        accept: Callable[[Any], bool] | None = None,
        **kwargs: Any,
    ) -> Any:
        """Run implementations in call order and return the first that accepts.

        `NoMatchError` moves on to the next implementation, and so does a value
        that is `None` or rejected by `accept`. Any other error is reported to
        `on_error` observers and re-raised.
        """

        for impl in self._iter_hookimpls(hook_name):
            call_kwargs = self._kwargs_for_impl(impl, kwargs)
            try:
                value = impl.function(**call_kwargs)
                if inspect.isawaitable(value):
                    value = await value
            except NoMatchError:
                logger.debug("hook.no_match hook={} plugin={}", hook_name, impl.plugin_name or "<unknown>")
                continue
            except Exception as error:
                await self.notify_error(
                    stage=f"{hook_name}:{impl.plugin_name or '<unknown>'}",
                    error=error,
                    command=_command_from_kwargs(kwargs),
                )
                raise
            if value is None or (accept is not None and not accept(value)):
                logger.debug("hook.declined hook={} plugin={}", hook_name, impl.plugin_name or "<unknown>")
                continue
            return value
        raise NoMatchError(f"no plugin handled hook {hook_name}")

    def call_many_sync(self, hook_name: str, **kwargs: Any) -> list[Any]:
        """Run every implementation and collect return values, skipping failures."""

        results: list[Any] = []
        for impl in self._iter_hookimpls(hook_name):
            call_kwargs = self._kwargs_for_impl(impl, kwargs)
            try:
                value = impl.function(**call_kwargs)
            except Exception as error:
                self.notify_error_sync(
                    stage=f"{hook_name}:{impl.plugin_name or '<unknown>'}",
                    error=error,
                    command=_command_from_kwargs(kwargs),
                )
                continue
            if inspect.isawaitable(value):
                logger.warning(
                    "hook.async_not_supported hook={} plugin={}",
                    hook_name,
                    impl.plugin_name or "<unknown>",
                )
                continue
            results.append(value)
        return results

    async def notify_error(self, *, stage: str, error: Exception, command: Command | None) -> None:
        """Call on_error hooks, swallowing observer failures."""

        for impl in self._iter_hookimpls("on_error"):
            call_kwargs = self._kwargs_for_impl(impl, {"stage": stage, "error": error, "command": command})
            try:
                value = impl.function(**call_kwargs)
                if inspect.isawaitable(value):
                    await value
            except Exception:
                logger.opt(exception=True).warning(
                    "hook.on_error_failed stage={} plugin={}",
                    stage,
                    impl.plugin_name or "<unknown>",
                )

    def notify_error_sync(self, *, stage: str, error: Exception, command: Command | None) -> None:
        """Synchronous on_error dispatch for bootstrap paths."""

        for impl in self._iter_hookimpls("on_error"):
            call_kwargs = self._kwargs_for_impl(impl, {"stage": stage, "error": error, "command": command})
            try:
                value = impl.function(**call_kwargs)
            except Exception:
                logger.opt(exception=True).warning(
                    "hook.on_error_failed stage={} plugin={}",
                    stage,
                    impl.plugin_name or "<unknown>",
                )
                continue
            if inspect.isawaitable(value):
                logger.warning(
                    "hook.async_not_supported hook=on_error plugin={}",
                    impl.plugin_name or "<unknown>",
                )

    def hook_report(self) -> dict[str, list[str]]:
        """Build a hook->plugins mapping for diagnostics."""

        report: dict[str, list[str]] = {}
        for hook_name, hook_caller in sorted(self._plugin_manager.hook.__dict__.items()):
            if hook_name.startswith("_") or not hasattr(hook_caller, "get_hookimpls"):
                continue
            plugin_names = [impl.plugin_name for impl in self._iter_hookimpls(hook_name)]
            if plugin_names:
                report[hook_name] = plugin_names
        return report

    def _iter_hookimpls(self, hook_name: str) -> list[Any]:
        hook = getattr(self._plugin_manager.hook, hook_name, None)
        if hook is None or not hasattr(hook, "get_hookimpls"):
            return []
        # pluggy stores trylast impls first and tryfirst impls last
        return sorted(hook.get_hookimpls(), key=_call_rank)

    @staticmethod
    def _kwargs_for_impl(impl: Any, kwargs: dict[str, Any]) -> dict[str, Any]:
        return {name: kwargs[name] for name in impl.argnames if name in kwargs}


def _call_rank(impl: Any) -> int:
    if impl.tryfirst:
        return 0
    if impl.trylast:
        return 2
    return 1


def _command_from_kwargs(kwargs: dict[str, Any]) -> Command | None:
    command = kwargs.get("command")
    if isinstance(command, Command):
        return command
    return None
