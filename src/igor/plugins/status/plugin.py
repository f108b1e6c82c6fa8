"""Status reports for third-party services."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from loguru import logger

from igor.config import Settings
from igor.errors import NoMatchError
from igor.hookspecs import hookimpl
from igor.plugins.base import IgorPlugin
from igor.plugins.status.aws import check_aws
from igor.plugins.status.domain import check_domain
from igor.plugins.status.fanout import check_all
from igor.plugins.status.registry import AdapterRegistry, default_registry
from igor.types import Command, ResponseEnvelope

AWS_KEYWORD = "aws"
STATUS_HEADLINE = "Status results:"
WEBSITE_HEADLINE = "The website is:"


class StatusPlugin(IgorPlugin):
    """Routes `status` commands to the matching checks.

    Handled commands, first match wins:

    - ``status``: every registered check, run concurrently
    - ``status aws``: the AWS status board
    - ``status <service>``: one registered check
    - ``status <domain>``: reachability of any other domain
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        registry: AdapterRegistry | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(name="status", description="Igor provides status reports for various services")
        self._settings = settings or Settings()
        self._registry = registry if registry is not None else default_registry()
        self._transport = transport

    @property
    def registry(self) -> AdapterRegistry:
        return self._registry

    @hookimpl
    def describe(self) -> dict[str, str]:
        trigger = self._settings.base_trigger
        return {
            trigger: "Check the status of various services",
            f"{trigger} {AWS_KEYWORD}": "Give an extensive status report on AWS",
            f"{trigger} [service]": "Check the status of a specific service",
            f"{trigger} [url]": "Checks if a website is up",
        }

    @hookimpl
    async def work(self, command: Command) -> ResponseEnvelope:
        if command.trigger != self._settings.base_trigger:
            raise NoMatchError(f"not a {self.name()} command: {command.raw!r}")

        response = ResponseEnvelope()
        async with self._client() as client:
            if not command.args:
                response.extend_records(await check_all(self._registry, client))
                response.headline = STATUS_HEADLINE
            elif command.args == (AWS_KEYWORD,):
                response.extend_records(await check_aws(client))
                response.headline = STATUS_HEADLINE
            elif command.remainder in self._registry:
                response.add_record(await self._registry[command.remainder].check(client))
                response.headline = STATUS_HEADLINE
            else:
                response.add_record(await check_domain(client, command.remainder))
                response.headline = WEBSITE_HEADLINE
        response.set_public()

        if response.is_empty():
            raise NoMatchError("Nothing found")
        logger.info("status.handled command={!r} records={}", command.raw, len(response.records))
        return response

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        async with httpx.AsyncClient(
            timeout=self._settings.request_timeout_seconds,
            headers={"User-Agent": self._settings.user_agent},
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            yield client
