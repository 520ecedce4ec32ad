"""Typed records for the source and destination config schemas"""

from . import destination, source

__all__ = ["source", "destination"]
