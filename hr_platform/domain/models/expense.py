"""
Expense Models
==============

Expense reports and their line items.
"""
from datetime import datetime
from typing import List, Optional
from dataclasses import dataclass, field

from hr_platform.domain.models.validation import ensure_non_negative


class ExpenseType:
    """Expense categories"""
    TRAVEL = "Travel"
    LODGING = "Lodging"
    MEALS = "Meals"
    ENTERTAINMENT = "Entertainment"
    OTHER = "Other"


class ExpenseReportStatus:
    """Expense report lifecycle states"""
    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    REIMBURSED = "Reimbursed"


@dataclass
class ExpenseItem:
    """
    One receipt line of an expense report.

    ``project_id`` attributes the cost to a project explicitly; project
    expense totals only ever look at this field.
    """
    expense_type: str
    amount: float
    currency: str = "EUR"
    date: Optional[datetime] = None
    description: str = ""
    receipt_file_id: Optional[str] = None
    is_tax_relevant: bool = False
    is_domestic: bool = True
    is_overnight: bool = False
    project_id: Optional[str] = None
    id: str = ""

    def __post_init__(self) -> None:
        ensure_non_negative(self.amount, "amount", "ExpenseItem")


@dataclass
class ExpenseReport:
    """
    Expense report domain model.

    The report total is always computed from its items.
    """
    employee_id: str
    date: datetime
    items: List[ExpenseItem] = field(default_factory=list)
    status: str = ExpenseReportStatus.DRAFT
    submission_date: Optional[datetime] = None
    approval_date: Optional[datetime] = None
    approver_id: Optional[str] = None
    comment: str = ""
    id: str = ""

    @property
    def total(self) -> float:
        return sum(item.amount for item in self.items)

    def items_for_project(self, project_id: str) -> List[ExpenseItem]:
        return [item for item in self.items if item.project_id == project_id]
