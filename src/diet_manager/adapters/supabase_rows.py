"""Conversions between domain values and Supabase row values."""

from datetime import date, datetime
from enum import Enum
from uuid import UUID


def to_row_value(value: object) -> object:
    """Convert a domain value into a JSON-compatible column value."""
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def to_row(payload: dict[str, object]) -> dict[str, object]:
    """Convert every value of a payload for insert or update."""
    return {key: to_row_value(value) for key, value in payload.items()}


def parse_datetime(raw: object) -> datetime | None:
    """Parse an ISO timestamp column, returning None when empty."""
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def parse_optional_uuid(raw: object) -> UUID | None:
    """Parse a nullable uuid column."""
    if raw:
        return UUID(str(raw))
    return None


def parse_optional_float(raw: object) -> float | None:
    """Parse a nullable numeric column."""
    if raw is None:
        return None
    return float(raw)
