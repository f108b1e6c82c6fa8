from __future__ import annotations

import pytest
from fixtures_plugins.fake_checks import (
    BrokenPlugin,
    EagerStatusPlugin,
    EchoPlugin,
    ErrorRecorder,
    FakeCheck,
    LateEchoPlugin,
    SilentPlugin,
)

from igor.config import Settings
from igor.errors import ConfigurationError, NoMatchError, UpstreamTransportError
from igor.framework import FAILURE_TEXT, NO_MATCH_TEXT, IgorFramework
from igor.plugins.help import HelpPlugin
from igor.plugins.status import AdapterRegistry, StatusPlugin
from igor.types import ResponseEnvelope, Severity, Visibility


def _framework(*checks: FakeCheck) -> IgorFramework:
    framework = IgorFramework(Settings())
    registry = AdapterRegistry(checks or [FakeCheck(name="svca"), FakeCheck(name="svcb", severity=Severity.DANGER)])
    framework.register(StatusPlugin(framework.settings, registry=registry))
    framework.register(EchoPlugin())
    framework.register(HelpPlugin(framework.descriptors))
    return framework


@pytest.mark.asyncio
async def test_dispatch_routes_status_command() -> None:
    framework = _framework()

    response = await framework.dispatch("status")

    assert response.headline == "Status results:"
    assert response.visibility is Visibility.PUBLIC
    assert {record.severity for record in response.records} == {Severity.GOOD, Severity.DANGER}


@pytest.mark.asyncio
async def test_dispatch_falls_through_to_next_plugin() -> None:
    framework = _framework()

    response = await framework.dispatch("echo hello there")

    assert response.headline == "hello there"


@pytest.mark.asyncio
async def test_dispatch_skips_plugins_that_return_nothing() -> None:
    framework = IgorFramework(Settings())
    silent = SilentPlugin()
    framework.register(silent)
    framework.register(EchoPlugin())

    response = await framework.dispatch("echo hi")

    assert silent.calls == 1
    assert response.headline == "hi"


@pytest.mark.asyncio
async def test_dispatch_skips_plugins_that_return_empty_replies() -> None:
    framework = IgorFramework(Settings())
    framework.register(SilentPlugin(reply=ResponseEnvelope()))
    framework.register(EchoPlugin())

    response = await framework.dispatch("echo hi")

    assert response.headline == "hi"


@pytest.mark.asyncio
async def test_dispatch_raises_no_match_when_only_empty_replies() -> None:
    framework = IgorFramework(Settings())
    framework.register(SilentPlugin())

    with pytest.raises(NoMatchError):
        await framework.dispatch("echo hi")


@pytest.mark.asyncio
async def test_dispatch_honours_tryfirst_and_trylast() -> None:
    framework = IgorFramework(Settings())
    framework.register(LateEchoPlugin())
    framework.register(StatusPlugin(framework.settings, registry=AdapterRegistry([FakeCheck(name="svca")])))
    framework.register(EchoPlugin())
    framework.register(EagerStatusPlugin())

    assert (await framework.dispatch("status")).headline == "eager status"
    assert (await framework.dispatch("echo hi")).headline == "hi"
    assert framework.hook_report()["work"] == ["eager", "status", "echo", "late-echo"]


@pytest.mark.asyncio
async def test_dispatch_raises_no_match_when_nobody_accepts() -> None:
    framework = _framework()

    with pytest.raises(NoMatchError):
        await framework.dispatch("make me a sandwich")


@pytest.mark.asyncio
async def test_dispatch_propagates_real_failures_and_notifies_observers() -> None:
    framework = _framework(FakeCheck(name="svca", error=UpstreamTransportError("svca: refused")))
    recorder = ErrorRecorder()
    framework._plugin_manager.register(recorder, name="recorder")

    with pytest.raises(UpstreamTransportError):
        await framework.dispatch("status svca")

    assert recorder.stages == ["work:status"]


@pytest.mark.asyncio
async def test_unexpected_plugin_errors_propagate() -> None:
    framework = _framework()
    framework.register(BrokenPlugin())

    with pytest.raises(RuntimeError, match="broke on purpose"):
        await framework.dispatch("broken")


@pytest.mark.asyncio
async def test_respond_turns_no_match_into_private_reply() -> None:
    framework = _framework()

    response = await framework.respond("what is this")

    assert response.headline == NO_MATCH_TEXT
    assert response.records == []
    assert response.visibility is Visibility.PRIVATE


@pytest.mark.asyncio
async def test_respond_turns_upstream_failure_into_private_reply() -> None:
    framework = _framework(FakeCheck(name="svca", error=UpstreamTransportError("svca: refused")))

    response = await framework.respond("status svca")

    assert response.headline == FAILURE_TEXT
    assert response.visibility is Visibility.PRIVATE
    assert response.records[0].body == "svca: refused"


@pytest.mark.asyncio
async def test_respond_hides_unexpected_errors() -> None:
    framework = _framework()
    framework.register(BrokenPlugin())

    response = await framework.respond("broken")

    assert response.headline == FAILURE_TEXT
    assert response.records == []


@pytest.mark.asyncio
async def test_help_lists_every_plugin() -> None:
    framework = _framework()

    response = await framework.dispatch("help")

    assert [record.title for record in response.records] == ["status", "echo", "help"]
    assert "status [url]: Checks if a website is up" in response.records[0].body


def test_register_rejects_duplicate_names() -> None:
    framework = _framework()

    with pytest.raises(ConfigurationError, match="duplicate plugin name: echo"):
        framework.register(EchoPlugin())


def test_load_plugins_registers_builtins() -> None:
    framework = IgorFramework(Settings())
    framework.load_plugins()

    assert [plugin.name() for plugin in framework.plugins][:2] == ["status", "help"]
    report = framework.hook_report()
    assert report["work"][:2] == ["status", "help"]
    assert "builtin:cli" in report["register_cli_commands"]
