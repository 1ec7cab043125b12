"""
Input validation shared by both engines.

Every failure is an ``InvalidInput`` (a ``ValueError``) carrying the dotted
name of the offending field, e.g. ``home.yards_per_play``, so the caller can
point the user at the right form input.
"""
from __future__ import annotations

import math
from numbers import Real
from typing import Any


class InvalidInput(ValueError):
    """A user-entered value is non-numeric or out of range."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class PositiveViolation(InvalidInput):
    """A value that must be strictly greater than 0 is not."""


class NonNegativeViolation(InvalidInput):
    """A value that must be >= 0 is negative."""


def is_finite_number(value: Any) -> bool:
    """True for real, finite numbers; bools are not numbers here."""
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def require_number(field: str, value: Any) -> float:
    if not is_finite_number(value):
        raise InvalidInput(field, f"{field} must be a finite number, got {value!r}")
    return value


def require_positive(field: str, value: Any) -> float:
    require_number(field, value)
    if not value > 0:
        raise PositiveViolation(field, f"{field} must be greater than 0, got {value}")
    return value


def require_non_negative(field: str, value: Any) -> float:
    require_number(field, value)
    if not value >= 0:
        raise NonNegativeViolation(field, f"{field} must be greater than or equal to 0, got {value}")
    return value


def require_positive_int(field: str, value: Any) -> int:
    """Positive whole number; ``12.0`` is accepted as 12."""
    require_positive(field, value)
    if value != math.floor(value):
        raise InvalidInput(field, f"{field} must be a whole number, got {value}")
    return int(value)


def require_flag(field: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise InvalidInput(field, f"{field} must be true or false, got {value!r}")
    return value
