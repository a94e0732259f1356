"""
Project Model
=============

Domain model representing a customer project and its team.
"""
from datetime import datetime
from typing import List, Optional
from dataclasses import dataclass, field

from hr_platform.domain.models.validation import ensure_date_range


@dataclass
class Project:
    """
    Project domain model.

    ``member_employee_ids`` is a set in meaning; order carries no information.
    ``hourly_rate`` overrides the configured default rate in revenue reports.
    """
    project_number: str
    name: str
    description: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    member_employee_ids: List[str] = field(default_factory=list)
    hourly_rate: Optional[float] = None
    id: str = ""

    def __post_init__(self) -> None:
        ensure_date_range(self.start_date, self.end_date, "Project")

    def add_member(self, employee_id: str) -> None:
        """Add an employee to the team (no-op if already a member)."""
        if employee_id not in self.member_employee_ids:
            self.member_employee_ids.append(employee_id)

    def remove_member(self, employee_id: str) -> bool:
        """Remove an employee from the team."""
        if employee_id in self.member_employee_ids:
            self.member_employee_ids.remove(employee_id)
            return True
        return False
