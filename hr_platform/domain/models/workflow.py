"""
Approval Workflow Model
=======================

Multi-step approval attached to an arbitrary business entity.

Workflow states:  Open -> InProgress -> Completed
                  Open/InProgress -> Rejected
Step decisions:   Pending -> Approved | Rejected (final once set)
"""
from datetime import datetime
from typing import List, Optional
from dataclasses import dataclass, field

from hr_platform.core.exceptions import MalformedEntityError
from hr_platform.utils.datetime_utils import now


class WorkflowEntityType:
    """Entity types a workflow (or document) can refer to"""
    EXPENSE_REPORT = "ExpenseReport"
    LEAVE_REQUEST = "LeaveRequest"
    TRAVEL_REQUEST = "TravelRequest"
    PAYROLL = "Payroll"
    OTHER = "Other"


class WorkflowStatus:
    """Workflow states"""
    OPEN = "Open"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    REJECTED = "Rejected"

    ACTIVE = (OPEN, IN_PROGRESS)
    TERMINAL = (COMPLETED, REJECTED)


class ApprovalDecision:
    """Per-step decisions"""
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


@dataclass
class ApprovalStep:
    """
    One approver's step. ``decision_date`` is set exactly when the step
    has been decided.
    """
    step_number: int
    approver_id: str
    decision: str = ApprovalDecision.PENDING
    decision_date: Optional[datetime] = None
    comment: str = ""

    def __post_init__(self) -> None:
        decided = self.decision != ApprovalDecision.PENDING
        if decided != (self.decision_date is not None):
            raise MalformedEntityError(
                f"ApprovalStep {self.step_number}: decision_date must be set iff the step is decided"
            )

    @property
    def is_pending(self) -> bool:
        return self.decision == ApprovalDecision.PENDING

    def decide(self, decision: str, decided_at: datetime, comment: str = "") -> None:
        """Record the approver's decision together with its timestamp."""
        self.decision = decision
        self.decision_date = decided_at
        self.comment = comment


@dataclass
class ApprovalWorkflow:
    """
    Approval workflow domain model.

    Steps are numbered 1..N without gaps, in approval order.
    """
    entity_id: str
    entity_type: str
    steps: List[ApprovalStep] = field(default_factory=list)
    status: str = WorkflowStatus.OPEN
    created_at: datetime = field(default_factory=lambda: now())
    completed_at: Optional[datetime] = None
    id: str = ""

    def __post_init__(self) -> None:
        numbers = [step.step_number for step in self.steps]
        if numbers != list(range(1, len(self.steps) + 1)):
            raise MalformedEntityError(
                f"ApprovalWorkflow steps must be numbered 1..{len(self.steps)} in order, got {numbers}"
            )

    @property
    def is_active(self) -> bool:
        return self.status in WorkflowStatus.ACTIVE

    def next_pending_step(self) -> Optional[ApprovalStep]:
        """Lowest-numbered step still waiting for a decision."""
        for step in self.steps:
            if step.is_pending:
                return step
        return None

    def pending_steps_for(self, approver_id: str) -> List[ApprovalStep]:
        return [step for step in self.steps if step.approver_id == approver_id and step.is_pending]
