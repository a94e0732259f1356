"""
Absence Models
==============

Leave requests and sick notes. Both cover an inclusive date range.
"""
from datetime import datetime
from typing import Optional
from dataclasses import dataclass

from hr_platform.domain.models.validation import ensure_date_range
from hr_platform.utils.datetime_utils import inclusive_days


class LeaveType:
    """Kinds of leave"""
    VACATION = "Vacation"
    SPECIAL = "Special"  # wedding, relocation, ...
    UNPAID = "Unpaid"
    PARENTAL_LEAVE = "ParentalLeave"
    CARE_LEAVE = "CareLeave"


class LeaveRequestStatus:
    """Leave request lifecycle states"""
    REQUESTED = "Requested"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"


@dataclass
class LeaveRequest:
    employee_id: str
    start_date: datetime
    end_date: datetime
    leave_type: str = LeaveType.VACATION
    reason: str = ""
    status: str = LeaveRequestStatus.REQUESTED
    request_date: Optional[datetime] = None
    approval_date: Optional[datetime] = None
    approver_id: Optional[str] = None
    id: str = ""

    def __post_init__(self) -> None:
        ensure_date_range(self.start_date, self.end_date, "LeaveRequest")

    @property
    def days(self) -> int:
        return inclusive_days(self.start_date, self.end_date)


@dataclass
class SickNote:
    employee_id: str
    start_date: datetime
    end_date: datetime
    diagnosis_code: str = ""
    doctor_certificate_provided: bool = False
    notification_date: Optional[datetime] = None
    id: str = ""

    def __post_init__(self) -> None:
        ensure_date_range(self.start_date, self.end_date, "SickNote")

    @property
    def days(self) -> int:
        return inclusive_days(self.start_date, self.end_date)
