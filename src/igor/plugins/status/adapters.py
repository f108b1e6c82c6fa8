"""Single-service status checks."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol

import httpx

from igor.errors import ParseError
from igor.plugins.status.fetch import fetch_html, fetch_json
from igor.types import ResultRecord, Severity

PAGE_STATUS_SELECTOR = "div.page-status"
PAGE_STATUS_TEXT_SELECTOR = "div.page-status span.status"

INDICATOR_SEVERITY: Mapping[str, Severity] = {
    "none": Severity.GOOD,
    "minor": Severity.WARNING,
    "major": Severity.DANGER,
    "critical": Severity.DANGER,
}


class ServiceCheck(Protocol):
    """Queries one external status endpoint and reports a single record."""

    name: str
    title: str
    link: str

    async def check(self, client: httpx.AsyncClient) -> ResultRecord: ...


@dataclass(frozen=True)
class StatusPageCheck:
    """Scrapes a hosted status page rendered with the common page-status template."""

    name: str
    title: str
    link: str

    async def check(self, client: httpx.AsyncClient) -> ResultRecord:
        document = await fetch_html(client, self.link, service=self.name)
        container = document.select_one(PAGE_STATUS_SELECTOR)
        if container is None:
            raise ParseError(f"{self.name}: page status block not found", service=self.name, url=self.link)

        status_text = " ".join(node.get_text(strip=True) for node in document.select(PAGE_STATUS_TEXT_SELECTOR))
        classes = container.get("class") or []
        if "status-none" in classes:
            severity = Severity.GOOD
        elif "status-yellow" in classes:
            severity = Severity.WARNING
        else:
            severity = Severity.DANGER
        return ResultRecord(title=self.title, body=status_text, severity=severity, preceding_context=self.link)


@dataclass(frozen=True)
class StatusApiCheck:
    """Reads the JSON summary endpoint of a hosted status page."""

    name: str
    title: str
    link: str
    api_url: str
    severities: Mapping[str, Severity] = field(default_factory=lambda: INDICATOR_SEVERITY, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "severities", MappingProxyType(dict(self.severities)))

    async def check(self, client: httpx.AsyncClient) -> ResultRecord:
        payload = await fetch_json(client, self.api_url, service=self.name)
        status = payload.get("status")
        if not isinstance(status, dict):
            raise ParseError(f"{self.name}: missing status object", service=self.name, url=self.api_url)
        indicator = status.get("indicator")
        description = status.get("description")
        if not isinstance(indicator, str) or not isinstance(description, str):
            raise ParseError(f"{self.name}: missing status fields", service=self.name, url=self.api_url)

        severity = self.severities.get(indicator, Severity.UNSET)
        return ResultRecord(title=self.title, body=description, severity=severity, preceding_context=self.link)


DEFAULT_CHECKS: tuple[ServiceCheck, ...] = (
    StatusApiCheck(
        name="github",
        title="GitHub",
        link="https://www.githubstatus.com",
        api_url="https://www.githubstatus.com/api/v2/status.json",
    ),
    StatusPageCheck(name="bitbucket", title="Bitbucket", link="https://bitbucket.status.atlassian.com"),
    StatusPageCheck(name="npmjs", title="NPM", link="https://status.npmjs.org"),
    StatusPageCheck(name="disqus", title="Disqus", link="https://status.disqus.com"),
    StatusPageCheck(name="cloudflare", title="Cloudflare", link="https://www.cloudflarestatus.com"),
)
