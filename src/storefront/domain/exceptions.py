"""Domain-level exceptions.

All failures raised by the storefront core are subclasses of DomainException
so presentation layers (the CLI included) can catch them uniformly and
display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all storefront errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class NetworkError(DomainException):
    """The catalog service could not be reached, answered with a non-2xx
    status, or returned a payload that could not be decoded."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PersistenceError(DomainException):
    """Local storage could not be read, written, or decoded."""
