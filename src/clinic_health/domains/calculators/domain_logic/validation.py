"""Input validation helpers shared by the calculators and the MCP tool layer.

The calculations themselves trust numeric input (a zero height divides by
zero, a negative weight yields a negative BMI). Callers that want to reject
such values up front use the helpers below.
"""

from __future__ import annotations

from datetime import date, datetime


class InvalidInputError(ValueError):
    """Raised when an input cannot be used for a calculation."""


def require_positive(name: str, value: float) -> float:
    """Return ``value`` as float if it is strictly positive."""
    number = _to_float(name, value)
    if number <= 0:
        raise InvalidInputError(f"{name} must be greater than zero (got {value!r})")
    return number


def require_non_negative(name: str, value: float) -> float:
    """Return ``value`` as float if it is zero or positive."""
    number = _to_float(name, value)
    if number < 0:
        raise InvalidInputError(f"{name} must not be negative (got {value!r})")
    return number


def require_range(name: str, value: float, lo: float, hi: float) -> float:
    """Return ``value`` as float if ``lo <= value <= hi``."""
    number = _to_float(name, value)
    if not lo <= number <= hi:
        raise InvalidInputError(f"{name} must be between {lo} and {hi} (got {value!r})")
    return number


def require_choice(name: str, value: str, choices: tuple[str, ...] | list[str]) -> str:
    """Return ``value`` if it is one of ``choices``."""
    if value not in choices:
        raise InvalidInputError(
            f"{name} must be one of: {' | '.join(choices)} (got {value!r})"
        )
    return value


def parse_iso_date(name: str, value: str | date) -> date:
    """Parse an ISO 8601 date (``YYYY-MM-DD``); datetimes are truncated."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError as exc:
        raise InvalidInputError(f"{name} must be an ISO date like 2024-01-31 (got {value!r})") from exc


def _to_float(name: str, value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{name} must be a number (got {value!r})") from exc
