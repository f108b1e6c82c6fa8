"""Slack message payloads for response envelopes."""

from __future__ import annotations

from typing import Any

from igor.types import ResponseEnvelope, ResultRecord


def render_attachment(record: ResultRecord) -> dict[str, str]:
    attachment = {"title": record.title, "text": record.body}
    if record.preceding_context:
        attachment["pretext"] = record.preceding_context
    if record.severity.value:
        attachment["color"] = record.severity.value
    return attachment


def render_response(response: ResponseEnvelope) -> dict[str, Any]:
    """Build the JSON body Slack expects from a slash command handler."""

    payload: dict[str, Any] = {
        "text": response.headline,
        "response_type": response.visibility.value,
    }
    if response.records:
        payload["attachments"] = [render_attachment(record) for record in response.records]
    return payload
