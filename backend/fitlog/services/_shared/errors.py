"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. They are the stable contract between repositories, the routine
composer and application services.

The translation to HTTP responses (RFC 7807) happens in
``BaseService.translate_exceptions()`` which maps them onto
``fitlog.core.errors`` types.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name; SQLite only reports the columns,
    so callers usually pass the constraint name and fall back to a column hint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        Constraint name (or column fragment) to look for, e.g.
        ``'uq_routines_owner_name'``.

    Returns
    -------
    bool
        True if the IntegrityError message mentions ``constraint_name``.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer translates them to ``APIError`` via ``BaseService``.
    """


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found (or is hidden from the actor).

    :param entity: Entity name (e.g., "Routine").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "Routine").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:  # pragma: no cover
        return f"Conflict on {self.entity}: {self.detail}"


class AuthorizationError(ServiceError):
    """Raised when the actor may not act on a resource."""

    def __init__(self, message: str = "You are not allowed to access this resource.") -> None:
        super().__init__(message)


class InvalidOperationError(ServiceError):
    """
    Raised when an editing command is well-formed but cannot be applied,
    e.g. an entry index past the end of a routine draft.
    """

    def __init__(self, message: str, *, code: str = "invalid_operation") -> None:
        super().__init__(message)
        self.code = code


class PreconditionFailedError(ServiceError):
    """
    Raised when preconditions such as ETag ``If-Match`` validation fail.
    """

    def __init__(self, message: str = "Precondition failed (ETag mismatch)") -> None:
        super().__init__(message)
