"""Errors raised by the persistence layer.

Every error derives from :class:`PersistenceError` and also from the closest
builtin exception, so callers may catch either.
"""

from __future__ import annotations


class PersistenceError(Exception):
    """Base class for storage failures."""


class NotFoundError(PersistenceError, LookupError):
    """No row exists for the requested identifier."""


class ConversionError(PersistenceError, ValueError):
    """A stored scalar could not be converted to or from a domain value."""


class ConstraintViolationError(PersistenceError):
    """A write or delete would break a relational constraint."""


class StorageConnectionError(PersistenceError, ConnectionError):
    """The backing database could not be opened."""
