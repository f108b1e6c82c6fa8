"""AWS status board: one page fanned out into many records."""

from __future__ import annotations

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from igor.plugins.status.fetch import fetch_html
from igor.types import ResultRecord, Severity

AWS_STATUS_URL = "https://status.aws.amazon.com"
SERVICE_NAME = "aws"
EVENT_ROWS_SELECTOR = "div#current_events_block table tr"
NORMAL_MESSAGE = "Service is operating normally"
RESOLVED_MARKER = "[RESOLVED]"
MORE_EXPANDER = "\n            more \n        \n        \n      "


async def check_aws(client: httpx.AsyncClient) -> list[ResultRecord]:
    """Fetch the AWS status board and summarize its current events."""

    document = await fetch_html(client, AWS_STATUS_URL, service=SERVICE_NAME)
    return parse_aws_board(document)


def parse_aws_board(document: BeautifulSoup | str) -> list[ResultRecord]:
    """Turn the current events table into a summary record plus one record per event.

    The summary always comes first. Events whose message starts with
    ``[RESOLVED]`` are warnings, every other abnormal event is a danger.
    """

    if isinstance(document, str):
        document = BeautifulSoup(document, "html.parser")

    events: list[ResultRecord] = []
    resolved = 0
    problems = 0
    for row in document.select(EVENT_ROWS_SELECTOR):
        cells = row.find_all("td")
        message = _cell_text(cells, 2).strip(" \n")
        if not message or message == NORMAL_MESSAGE:
            continue
        message = message.replace(MORE_EXPANDER, "\n", 1).replace(".", ".\n")
        service = _cell_text(cells, 1)
        if message.startswith(RESOLVED_MARKER):
            severity = Severity.WARNING
            resolved += 1
        else:
            severity = Severity.DANGER
            problems += 1
        events.append(ResultRecord(title=service, body=message, severity=severity))

    logger.debug("status.aws_parsed problems={} resolved={}", problems, resolved)
    return [_summary(problems=problems, resolved=resolved), *events]


def _summary(*, problems: int, resolved: int) -> ResultRecord:
    if problems:
        body = f"Nr of issues: {problems}"
        if resolved:
            body += f"\nNr of resolved issues: {resolved}"
        severity = Severity.DANGER
    elif resolved:
        body = f"Nr of resolved issues: {resolved}"
        severity = Severity.WARNING
    else:
        body = "Everything is operating normally"
        severity = Severity.GOOD
    return ResultRecord(title="AWS", body=body, severity=severity, preceding_context=AWS_STATUS_URL)


def _cell_text(cells: list, index: int) -> str:
    if index >= len(cells):
        return ""
    return cells[index].get_text()
