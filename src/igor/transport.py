"""Inbound shims: slash-command form bodies and API Gateway events."""

from __future__ import annotations

import asyncio
import base64
import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qs

from loguru import logger

from igor.framework import IgorFramework
from igor.logging_utils import request_context
from igor.slack import render_response

JSON_HEADERS = {"Content-Type": "application/json; charset=utf-8"}

_FRAMEWORK: IgorFramework | None = None


def decode_form_body(body: str) -> str:
    """Extract the command text from an url-encoded slash command body."""

    fields = parse_qs(body, keep_blank_values=True)
    values = fields.get("text") or [""]
    return values[0].strip()


def _event_body(event: Mapping[str, Any]) -> str:
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8", errors="replace")
    return str(body)


async def answer_form(framework: IgorFramework, body: str) -> dict[str, Any]:
    """Run the command in a slash-command body and render the Slack payload."""

    response = await framework.respond(decode_form_body(body))
    return render_response(response)


async def handle_event(framework: IgorFramework, event: Mapping[str, Any]) -> dict[str, Any]:
    """Answer one API Gateway proxy event with a rendered Slack payload."""

    request_id = str((event.get("requestContext") or {}).get("requestId", "-"))
    with request_context(request_id):
        logger.info("transport.request request_id={}", request_id)
        payload = await answer_form(framework, _event_body(event))
        return {
            "statusCode": 200,
            "headers": dict(JSON_HEADERS),
            "body": json.dumps(payload),
        }


def lambda_handler(event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
    """AWS Lambda entry point."""

    _ = context
    return asyncio.run(handle_event(_framework(), event))


def _framework() -> IgorFramework:
    global _FRAMEWORK
    if _FRAMEWORK is None:
        from igor.config import get_settings

        framework = IgorFramework(get_settings())
        framework.load_plugins()
        _FRAMEWORK = framework
    return _FRAMEWORK
