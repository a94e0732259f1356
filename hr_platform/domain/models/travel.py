"""
Travel Models
=============

Travel requests and the expenses booked against them.
"""
from datetime import datetime
from typing import List, Optional
from dataclasses import dataclass, field

from hr_platform.domain.models.validation import ensure_date_range, ensure_non_negative


class TravelRequestStatus:
    """Travel request lifecycle states"""
    REQUESTED = "Requested"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


class TravelExpenseType:
    """Travel expense categories"""
    TRAVEL = "Travel"
    LODGING = "Lodging"
    MEALS = "Meals"
    OTHER = "Other"


@dataclass
class TravelRequest:
    employee_id: str
    start_date: datetime
    end_date: datetime
    destination: str
    purpose: str = ""
    status: str = TravelRequestStatus.REQUESTED
    request_date: Optional[datetime] = None
    approval_date: Optional[datetime] = None
    approver_id: Optional[str] = None
    linked_expense_report_ids: List[str] = field(default_factory=list)
    document_ids: List[str] = field(default_factory=list)
    id: str = ""

    def __post_init__(self) -> None:
        ensure_date_range(self.start_date, self.end_date, "TravelRequest")


@dataclass
class TravelExpense:
    """Single cost position of a trip; references its parent TravelRequest."""
    travel_request_id: str
    employee_id: str
    date: datetime
    expense_type: str
    amount: float
    currency: str = "EUR"
    description: str = ""
    receipt_document_id: Optional[str] = None
    is_approved: bool = False
    id: str = ""

    def __post_init__(self) -> None:
        ensure_non_negative(self.amount, "amount", "TravelExpense")
