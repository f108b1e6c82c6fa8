"""Builtin host extensions."""
