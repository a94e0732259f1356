"""
Payroll Model
=============

Monthly (or arbitrary period) salary statement for one employee.
"""
from datetime import datetime
from typing import Dict, FrozenSet, List, Optional
from dataclasses import dataclass, field

from hr_platform.core.exceptions import InvalidArgumentError
from hr_platform.domain.models.validation import ensure_date_range


class PayrollStatus:
    """Payroll lifecycle states"""
    DRAFT = "Draft"
    CALCULATED = "Calculated"
    SETTLED = "Settled"
    PAID_OUT = "PaidOut"
    ERROR = "Error"


# Draft -> Calculated -> Settled -> PaidOut; any non-final state may fail into Error
PAYROLL_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    PayrollStatus.DRAFT: frozenset({PayrollStatus.CALCULATED, PayrollStatus.ERROR}),
    PayrollStatus.CALCULATED: frozenset({PayrollStatus.SETTLED, PayrollStatus.ERROR}),
    PayrollStatus.SETTLED: frozenset({PayrollStatus.PAID_OUT, PayrollStatus.ERROR}),
    PayrollStatus.PAID_OUT: frozenset(),
    PayrollStatus.ERROR: frozenset(),
}


@dataclass
class Payroll:
    employee_id: str
    period_start: datetime
    period_end: datetime
    gross_salary: float = 0.0
    net_salary: float = 0.0
    tax_amount: float = 0.0
    social_security_amount: float = 0.0
    payout_date: Optional[datetime] = None
    status: str = PayrollStatus.DRAFT
    document_ids: List[str] = field(default_factory=list)
    id: str = ""

    def __post_init__(self) -> None:
        ensure_date_range(self.period_start, self.period_end, "Payroll")

    @property
    def deductions(self) -> float:
        return self.tax_amount + self.social_security_amount

    def advance_to(self, status: str) -> None:
        """
        Move the payroll to the next lifecycle state.

        Raises:
            InvalidArgumentError: If the transition is not part of the lifecycle
        """
        allowed = PAYROLL_TRANSITIONS.get(self.status, frozenset())
        if status not in allowed:
            raise InvalidArgumentError(f"Payroll cannot move from {self.status} to {status}")
        self.status = status
