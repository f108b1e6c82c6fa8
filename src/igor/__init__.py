"""Igor - status reports for your chat."""

from .framework import IgorFramework
from .types import Command, ResponseEnvelope, ResultRecord, Severity, Visibility

__version__ = "0.1.0"

__all__ = ["Command", "IgorFramework", "ResponseEnvelope", "ResultRecord", "Severity", "Visibility"]
