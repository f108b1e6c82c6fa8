from __future__ import annotations

import httpx
import pytest
from fixtures_plugins.pages import routed_transport

from igor.errors import InvalidDomainError, ParseError, UpstreamTransportError
from igor.plugins.status.domain import check_domain
from igor.types import Severity

URL = "https://isitup.org/example.com.json"


@pytest.mark.asyncio
async def test_code_one_is_up() -> None:
    transport = routed_transport({URL: {"domain": "example.com", "status_code": 1}})
    async with httpx.AsyncClient(transport=transport) as client:
        record = await check_domain(client, "example.com")

    assert record.title == "example.com"
    assert record.severity is Severity.GOOD
    assert record.body == ":thumbsup:"


@pytest.mark.asyncio
async def test_code_two_is_down() -> None:
    transport = routed_transport({URL: {"status_code": 2}})
    async with httpx.AsyncClient(transport=transport) as client:
        record = await check_domain(client, "example.com")

    assert record.severity is Severity.DANGER
    assert record.body == ":thumbsdown:"


@pytest.mark.asyncio
@pytest.mark.parametrize("code", [0, 3, 99])
async def test_other_codes_are_invalid_domains(code: int) -> None:
    transport = routed_transport({URL: {"status_code": code}})
    async with httpx.AsyncClient(transport=transport) as client:
        with pytest.raises(InvalidDomainError) as excinfo:
            await check_domain(client, "example.com")

    assert excinfo.value.domain == "example.com"


@pytest.mark.asyncio
async def test_missing_status_code_is_parse_error() -> None:
    transport = routed_transport({URL: {"domain": "example.com"}})
    async with httpx.AsyncClient(transport=transport) as client:
        with pytest.raises(ParseError):
            await check_domain(client, "example.com")


@pytest.mark.asyncio
async def test_unreachable_oracle_is_transport_error() -> None:
    transport = routed_transport({URL: 500})
    async with httpx.AsyncClient(transport=transport) as client:
        with pytest.raises(UpstreamTransportError):
            await check_domain(client, "example.com")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("domain", "expected_url"),
    [
        ("foo#bar", "https://isitup.org/foo%23bar.json"),
        ("foo?x=1", "https://isitup.org/foo%3Fx%3D1.json"),
        ("../admin/x", "https://isitup.org/..%2Fadmin%2Fx.json"),
    ],
)
async def test_domain_stays_one_path_segment(domain: str, expected_url: str) -> None:
    seen: list[str] = []
    transport = routed_transport({expected_url: {"status_code": 1}}, seen=seen)
    async with httpx.AsyncClient(transport=transport) as client:
        record = await check_domain(client, domain)

    assert seen == [expected_url]
    assert record.title == domain
