"""Run every registered status check concurrently."""

from __future__ import annotations

import asyncio

import httpx
from loguru import logger

from igor.errors import IgorError
from igor.plugins.status.adapters import ServiceCheck
from igor.plugins.status.registry import AdapterRegistry
from igor.types import ResultRecord, Severity


async def check_all(registry: AdapterRegistry, client: httpx.AsyncClient) -> list[ResultRecord]:
    """Return one record per registered check, in completion order.

    A failing check never fails the batch: it contributes an unset-severity
    record describing the failure instead.
    """

    records: list[ResultRecord] = []

    async def _run(check: ServiceCheck) -> None:
        records.append(await _check_or_degrade(check, client))

    async with asyncio.TaskGroup() as group:
        for name, check in registry.items():
            group.create_task(_run(check), name=f"status-{name}")

    logger.info("status.fanout_done checks={} records={}", len(registry), len(records))
    return records


async def _check_or_degrade(check: ServiceCheck, client: httpx.AsyncClient) -> ResultRecord:
    try:
        return await check.check(client)
    except IgorError as exc:
        logger.warning("status.check_failed service={} error={}", check.name, exc)
        error: Exception = exc
    except Exception as exc:
        logger.opt(exception=True).warning("status.check_crashed service={}", check.name)
        error = exc
    return ResultRecord(
        title=check.title,
        body=f"Unable to retrieve status: {error}",
        severity=Severity.UNSET,
        preceding_context=check.link,
    )
