"""Reachability lookup for arbitrary domains."""

from __future__ import annotations

from urllib.parse import quote

import httpx

from igor.errors import InvalidDomainError, ParseError
from igor.plugins.status.fetch import fetch_json
from igor.types import ResultRecord, Severity

ISITUP_URL = "https://isitup.org/{domain}.json"
SERVICE_NAME = "isitup"

UP = 1
DOWN = 2


async def check_domain(client: httpx.AsyncClient, domain: str) -> ResultRecord:
    """Ask isitup.org whether a domain is reachable.

    Status code 1 means up and 2 means down; anything else is treated as an
    unknown domain.
    """

    # one path segment, even for input containing "#", "?" or "/"
    url = ISITUP_URL.format(domain=quote(domain, safe=""))
    payload = await fetch_json(client, url, service=SERVICE_NAME)
    status_code = payload.get("status_code")
    if isinstance(status_code, bool) or not isinstance(status_code, int):
        raise ParseError(f"{SERVICE_NAME}: missing status_code", service=SERVICE_NAME, url=url)

    if status_code == UP:
        return ResultRecord(title=domain, body=":thumbsup:", severity=Severity.GOOD)
    if status_code == DOWN:
        return ResultRecord(title=domain, body=":thumbsdown:", severity=Severity.DANGER)
    raise InvalidDomainError(domain)
