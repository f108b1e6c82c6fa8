"""Data model shared by the host and its plugins."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class Severity(str, Enum):
    """Coarse health signal. Values double as Slack attachment colors."""

    GOOD = "good"
    WARNING = "warning"
    DANGER = "danger"
    UNSET = ""


class Visibility(str, Enum):
    """Who gets to see a response."""

    PRIVATE = "ephemeral"
    PUBLIC = "in_channel"


@dataclass(frozen=True)
class Command:
    """One tokenized inbound command."""

    raw: str
    trigger: str
    args: tuple[str, ...] = ()

    @property
    def remainder(self) -> str:
        return " ".join(self.args)


@dataclass(frozen=True)
class ResultRecord:
    """Current state of one service or sub-service."""

    title: str
    body: str = ""
    severity: Severity = Severity.UNSET
    preceding_context: str | None = None


@dataclass
class ResponseEnvelope:
    """Reply assembled by a plugin and handed to a transport."""

    headline: str = ""
    records: list[ResultRecord] = field(default_factory=list)
    visibility: Visibility = Visibility.PRIVATE

    def add_record(self, record: ResultRecord) -> None:
        self.records.append(record)

    def extend_records(self, records: Iterable[ResultRecord]) -> None:
        self.records.extend(records)

    def set_public(self) -> None:
        self.visibility = Visibility.PUBLIC

    def is_empty(self) -> bool:
        return not self.records and not self.headline


@dataclass(frozen=True)
class PluginDescriptor:
    """Static discovery data for one plugin."""

    name: str
    description: str
    help_entries: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "help_entries", MappingProxyType(dict(self.help_entries)))
