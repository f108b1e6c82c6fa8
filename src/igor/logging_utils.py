"""Runtime logging helpers."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from logging import Handler
from typing import Literal

import loguru
from loguru import logger
from rich import get_console
from rich.logging import RichHandler

LogProfile = Literal["default", "chat"]

_PROFILE_FORMATS: dict[LogProfile, str] = {
    "chat": "{level} | {extra[request]} |{message}",
    "default": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {extra[request]} | {message}",
}
_CONFIGURED: tuple[LogProfile, str] | None = None
_current_request: ContextVar[str] = ContextVar("igor_request", default="-")


def current_request() -> str:
    return _current_request.get()


@contextmanager
def request_context(request_id: str) -> Iterator[None]:
    """Tag log lines emitted inside the block with one request id."""

    token = _current_request.set(request_id or "-")
    try:
        yield
    finally:
        _current_request.reset(token)


def _build_chat_handler() -> Handler:
    return RichHandler(
        console=get_console(),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def configure_logging(*, profile: LogProfile = "default", level: str | None = None) -> None:
    """Configure process-level logging, once per profile and level."""

    def inject_context(record: loguru.Record) -> None:
        record["extra"]["request"] = current_request()

    global _CONFIGURED
    resolved_level = (level or os.getenv("IGOR_LOG_LEVEL", "INFO")).upper()
    if (profile, resolved_level) == _CONFIGURED:
        return

    logger.remove()
    if profile == "chat":
        logger.add(
            _build_chat_handler(),
            level=resolved_level,
            format="{message}",
            backtrace=False,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stderr,
            level=resolved_level,
            format=_PROFILE_FORMATS[profile],
            backtrace=False,
            diagnose=False,
        )
        logger.configure(patcher=inject_context)
    _CONFIGURED = (profile, resolved_level)
