"""Application-level exception types for Igor."""

from __future__ import annotations


class IgorError(Exception):
    """Base exception for Igor."""


class ConfigurationError(IgorError):
    """Raised for invalid settings or conflicting registrations."""


class NoMatchError(IgorError):
    """Raised by a plugin when a command is not addressed to it."""


class UpstreamError(IgorError):
    """Base exception for failures talking to an external service."""

    def __init__(self, message: str, *, service: str | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.service = service
        self.url = url


class UpstreamTransportError(UpstreamError):
    """Raised when an outbound call fails (network, timeout, non-2xx)."""


class ParseError(UpstreamError):
    """Raised when an upstream response is missing the expected fields."""


class InvalidDomainError(IgorError):
    """Raised when the up/down oracle does not recognize a domain."""

    def __init__(self, domain: str) -> None:
        super().__init__(f"Not a valid domain: {domain}")
        self.domain = domain
