"""
Time Entry Models
=================

Working time and project time bookings.
"""
from datetime import datetime
from typing import Optional
from dataclasses import dataclass

from hr_platform.domain.models.validation import ensure_date_range, ensure_non_negative


@dataclass
class WorkTimeEntry:
    """
    Attendance record for one employee and day.

    ``hours`` is derived from start and end time and is never stored.
    """
    employee_id: str
    date: datetime
    start_time: datetime
    end_time: datetime
    description: str = ""
    is_billable: bool = False
    project_id: Optional[str] = None
    id: str = ""

    def __post_init__(self) -> None:
        ensure_date_range(self.start_time, self.end_time, "WorkTimeEntry")

    @property
    def hours(self) -> float:
        return (self.end_time - self.start_time).total_seconds() / 3600.0


@dataclass
class ProjectTimeEntry:
    """Hours an employee booked on a project for one day."""
    employee_id: str
    project_id: str
    date: datetime
    hours: float
    activity: str = ""
    description: str = ""
    id: str = ""

    def __post_init__(self) -> None:
        ensure_non_negative(self.hours, "hours", "ProjectTimeEntry")
