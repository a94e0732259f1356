"""Shared invariant checks for domain models."""
from datetime import datetime
from typing import Optional

from hr_platform.core.exceptions import MalformedEntityError


def ensure_date_range(start: Optional[datetime], end: Optional[datetime], entity_name: str) -> None:
    """Raise MalformedEntityError when end lies before start."""
    if start is not None and end is not None and end < start:
        raise MalformedEntityError(
            f"{entity_name}: end ({end.isoformat()}) is before start ({start.isoformat()})"
        )


def ensure_non_negative(value: float, field_name: str, entity_name: str) -> None:
    if value < 0:
        raise MalformedEntityError(f"{entity_name}: {field_name} must not be negative (got {value})")
