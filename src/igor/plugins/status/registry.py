"""Immutable lookup of service checks by short name."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from igor.errors import ConfigurationError
from igor.plugins.status.adapters import DEFAULT_CHECKS, ServiceCheck


class AdapterRegistry(Mapping[str, ServiceCheck]):
    """Service checks keyed by name, fixed once built."""

    def __init__(self, checks: Iterable[ServiceCheck]) -> None:
        entries: dict[str, ServiceCheck] = {}
        for check in checks:
            if check.name in entries:
                raise ConfigurationError(f"duplicate status check: {check.name}")
            entries[check.name] = check
        self._entries = MappingProxyType(entries)

    def __getitem__(self, name: str) -> ServiceCheck:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def names(self) -> list[str]:
        return list(self._entries)


def default_registry() -> AdapterRegistry:
    return AdapterRegistry(DEFAULT_CHECKS)
