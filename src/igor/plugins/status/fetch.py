"""Outbound request helpers that translate httpx failures into Igor errors."""

from __future__ import annotations

import json
from typing import Any

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from igor.errors import ParseError, UpstreamTransportError

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


async def fetch_text(client: httpx.AsyncClient, url: str, *, service: str, accept: str = HTML_ACCEPT) -> str:
    """GET one URL and return its decoded body, failing on transport errors and non-2xx."""

    logger.debug("status.fetch service={} url={}", service, url)
    try:
        response = await client.get(url, headers={"Accept": accept})
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise UpstreamTransportError(
            f"{service}: http {exc.response.status_code}", service=service, url=url
        ) from exc
    except httpx.HTTPError as exc:
        raise UpstreamTransportError(f"{service}: {exc!s}", service=service, url=url) from exc
    return response.text


async def fetch_json(client: httpx.AsyncClient, url: str, *, service: str) -> dict[str, Any]:
    body = await fetch_text(client, url, service=service, accept="application/json")
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise ParseError(f"{service}: invalid json response: {exc!s}", service=service, url=url) from exc
    if not isinstance(payload, dict):
        raise ParseError(f"{service}: expected a json object", service=service, url=url)
    return payload


async def fetch_html(client: httpx.AsyncClient, url: str, *, service: str) -> BeautifulSoup:
    body = await fetch_text(client, url, service=service)
    return BeautifulSoup(body, "html.parser")
