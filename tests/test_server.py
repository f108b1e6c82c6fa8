from __future__ import annotations

from urllib.parse import urlencode

from fastapi.testclient import TestClient
from fixtures_plugins.fake_checks import EchoPlugin, FakeCheck

from igor.config import Settings
from igor.framework import NO_MATCH_TEXT, IgorFramework
from igor.plugins.status import AdapterRegistry, StatusPlugin
from igor.server import create_app

FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


def _client() -> TestClient:
    framework = IgorFramework(Settings())
    registry = AdapterRegistry([FakeCheck(name="svca")])
    framework.register(StatusPlugin(framework.settings, registry=registry))
    framework.register(EchoPlugin())
    return TestClient(create_app(framework))


def test_post_answers_with_slack_payload() -> None:
    client = _client()

    res = client.post("/", content=urlencode({"command": "/igor", "text": "status svca"}), headers=FORM_HEADERS)

    assert res.status_code == 200
    assert res.headers["content-type"].startswith("application/json")
    data = res.json()
    assert data["text"] == "Status results:"
    assert data["response_type"] == "in_channel"
    assert data["attachments"][0]["title"] == "Svca"


def test_post_with_unknown_command_gets_private_reply() -> None:
    client = _client()

    res = client.post("/", content=urlencode({"text": "dance"}), headers=FORM_HEADERS)

    assert res.status_code == 200
    assert res.json() == {"text": NO_MATCH_TEXT, "response_type": "ephemeral"}


def test_post_without_text_field_is_no_match() -> None:
    client = _client()

    res = client.post("/", content="command=%2Figor", headers=FORM_HEADERS)

    assert res.json()["text"] == NO_MATCH_TEXT


def test_only_post_is_served() -> None:
    client = _client()

    res = client.get("/")

    assert res.status_code == 405
