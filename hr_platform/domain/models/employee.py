"""
Employee Model
==============

Domain model representing an employee.
This is a pure domain object with no infrastructure dependencies.
"""
from datetime import datetime
from typing import Optional
from dataclasses import dataclass


@dataclass
class Employee:
    """
    Employee domain model.

    Employees are never removed; ``is_active`` is cleared instead and
    inactive employees drop out of utilization and absence reports.
    """
    personnel_number: str
    first_name: str
    last_name: str
    email: str
    department: str = ""
    position: str = ""
    hire_date: Optional[datetime] = None
    is_active: bool = True
    id: str = ""  # Empty until the store assigns one

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def activate(self) -> None:
        """Activate the employee."""
        self.is_active = True

    def deactivate(self) -> None:
        """Deactivate the employee."""
        self.is_active = False
