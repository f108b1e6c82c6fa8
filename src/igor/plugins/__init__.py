"""Builtin Igor plugins."""

from igor.plugins.base import IgorPlugin

__all__ = ["IgorPlugin"]
