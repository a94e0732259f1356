"""Collection names per entity type"""
from hr_platform.domain.models import (
    ApprovalWorkflow,
    Document,
    Employee,
    ExpenseReport,
    LeaveRequest,
    Payroll,
    Project,
    ProjectTimeEntry,
    SickNote,
    TravelExpense,
    TravelRequest,
    UserAccount,
    WorkTimeEntry,
)


class Collections:
    """MongoDB collection names"""
    EMPLOYEES = "employees"
    PROJECTS = "projects"
    WORK_TIME_ENTRIES = "work_time_entries"
    PROJECT_TIME_ENTRIES = "project_time_entries"
    LEAVE_REQUESTS = "leave_requests"
    SICK_NOTES = "sick_notes"
    EXPENSE_REPORTS = "expense_reports"
    PAYROLLS = "payrolls"
    TRAVEL_REQUESTS = "travel_requests"
    TRAVEL_EXPENSES = "travel_expenses"
    DOCUMENTS = "documents"
    APPROVAL_WORKFLOWS = "approval_workflows"
    USER_ACCOUNTS = "user_accounts"


# One store per entity type, keyed by the entity class
ENTITY_COLLECTIONS = {
    Employee: Collections.EMPLOYEES,
    Project: Collections.PROJECTS,
    WorkTimeEntry: Collections.WORK_TIME_ENTRIES,
    ProjectTimeEntry: Collections.PROJECT_TIME_ENTRIES,
    LeaveRequest: Collections.LEAVE_REQUESTS,
    SickNote: Collections.SICK_NOTES,
    ExpenseReport: Collections.EXPENSE_REPORTS,
    Payroll: Collections.PAYROLLS,
    TravelRequest: Collections.TRAVEL_REQUESTS,
    TravelExpense: Collections.TRAVEL_EXPENSES,
    Document: Collections.DOCUMENTS,
    ApprovalWorkflow: Collections.APPROVAL_WORKFLOWS,
    UserAccount: Collections.USER_ACCOUNTS,
}
