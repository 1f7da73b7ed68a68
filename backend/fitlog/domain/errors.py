"""
Errors raised by the in-memory domain objects.

They carry no HTTP or persistence semantics; the service layer wraps them
into :class:`fitlog.services._shared.errors.InvalidOperationError`.
"""

from __future__ import annotations

from typing import Any


class DomainError(ValueError):
    """Base class for domain rule violations."""


class OutOfRangeError(DomainError):
    """
    Raised when an index does not address an existing element.

    :param index: Offending index as passed by the caller.
    :type index: int
    :param length: Size of the sequence at the time of the call.
    :type length: int
    :param what: Human label of the sequence (``"entry"``, ``"set"``...).
    :type what: str
    """

    def __init__(self, index: int, length: int, what: str = "entry") -> None:
        self.index = index
        self.length = length
        self.what = what
        super().__init__(f"{what} index {index} out of range (size {length})")


class InvalidFieldError(DomainError):
    """Raised when a caller tries to edit a field that is not editable."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"field '{field}' cannot be edited")


class InvalidValueError(DomainError):
    """Raised when a value cannot be coerced to the field's type."""

    def __init__(self, field: str, value: Any) -> None:
        self.field = field
        self.value = value
        super().__init__(f"invalid value for '{field}': {value!r}")
