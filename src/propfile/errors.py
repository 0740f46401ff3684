"""Exceptions raised by propfile."""

from __future__ import annotations


class PropertiesError(Exception):
    """Base class for all propfile errors."""


class EmptyKeyError(PropertiesError, ValueError):
    """A key was empty (or whitespace only)."""


class InvalidPairError(PropertiesError, ValueError):
    """A line had no '=' delimiter."""


class PropertyNotFoundError(PropertiesError, KeyError):
    """Strict lookup of a key that is not stored."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f'property "{self.key}" not found'
