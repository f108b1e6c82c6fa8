"""Command parsing helpers."""

from __future__ import annotations

from igor.types import Command


def parse_command(text: str) -> Command:
    """Split command text into a trigger word and argument tokens."""

    words = text.split()
    if not words:
        return Command(raw=text, trigger="")
    return Command(raw=text, trigger=words[0], args=tuple(words[1:]))
