"""
Domain Models
=============

Pure dataclasses for every business entity. Identifiers and foreign keys
are ObjectId strings; an empty ``id`` means "not stored yet".
"""
from .employee import Employee
from .project import Project
from .time_entry import WorkTimeEntry, ProjectTimeEntry
from .absence import LeaveRequest, LeaveRequestStatus, LeaveType, SickNote
from .expense import ExpenseItem, ExpenseReport, ExpenseReportStatus, ExpenseType
from .payroll import Payroll, PayrollStatus
from .travel import TravelExpense, TravelExpenseType, TravelRequest, TravelRequestStatus
from .document import Document, DocumentCategory, DocumentReference
from .workflow import (
    ApprovalDecision,
    ApprovalStep,
    ApprovalWorkflow,
    WorkflowEntityType,
    WorkflowStatus,
)
from .user_account import UserAccount

__all__ = [
    "Employee",
    "Project",
    "WorkTimeEntry",
    "ProjectTimeEntry",
    "LeaveRequest",
    "LeaveRequestStatus",
    "LeaveType",
    "SickNote",
    "ExpenseItem",
    "ExpenseReport",
    "ExpenseReportStatus",
    "ExpenseType",
    "Payroll",
    "PayrollStatus",
    "TravelExpense",
    "TravelExpenseType",
    "TravelRequest",
    "TravelRequestStatus",
    "Document",
    "DocumentCategory",
    "DocumentReference",
    "ApprovalDecision",
    "ApprovalStep",
    "ApprovalWorkflow",
    "WorkflowEntityType",
    "WorkflowStatus",
    "UserAccount",
]
