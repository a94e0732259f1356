"""
Domain Manager
==============

Application service that coordinates operations spanning several entity
types: employee and project lifecycle, time aggregation, absence
statistics, expenses, documents and approval workflows.

Every report is recomputed from the stored entities at call time; nothing
is cached. The manager only talks to EntityStore instances, never to the
database driver.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type

from hr_platform.core.config import Settings, get_settings
from hr_platform.core.exceptions import InvalidArgumentError
from hr_platform.domain.constants.absence_fields import AbsenceFields
from hr_platform.domain.constants.employee_fields import EmployeeFields, ProjectFields
from hr_platform.domain.constants.expense_fields import ExpenseFields, PayrollFields, TravelFields
from hr_platform.domain.constants.time_entry_fields import TimeEntryFields
from hr_platform.domain.constants.user_fields import UserFields
from hr_platform.domain.constants.workflow_fields import DocumentFields, WorkflowFields
from hr_platform.domain.models import (
    ApprovalWorkflow,
    Document,
    Employee,
    ExpenseReport,
    ExpenseReportStatus,
    LeaveRequest,
    Payroll,
    Project,
    ProjectTimeEntry,
    SickNote,
    TravelExpense,
    TravelRequest,
    UserAccount,
    WorkflowEntityType,
    WorkTimeEntry,
)
from hr_platform.domain.models.user_account import normalize
from hr_platform.domain.repositories.entity_store import EntityStore
from hr_platform.domain.repositories.filters import Filter
from hr_platform.application.services.approval_workflow_engine import ApprovalWorkflowEngine
from hr_platform.utils.datetime_utils import now, span_days

logger = logging.getLogger(__name__)

VACATION_DAYS = "vacation_days"
SICK_DAYS = "sick_days"


def _range_filter(
    key_field: str,
    key: str,
    date_field: str,
    date_from: Optional[datetime],
    date_to: Optional[datetime],
) -> Filter:
    """Equality on ``key_field`` plus optional inclusive bounds on ``date_field``."""
    query = Filter.eq(key_field, key)
    if date_from is not None:
        query &= Filter.gte(date_field, date_from)
    if date_to is not None:
        query &= Filter.lte(date_field, date_to)
    return query


class DomainManager:
    """
    Cross-entity operations over one store per business entity type.

    "Add or update" operations insert when the entity's id is empty and
    replace the stored document otherwise.
    """

    def __init__(
        self,
        stores: Mapping[Type, EntityStore],
        workflow_engine: Optional[ApprovalWorkflowEngine] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the manager.

        Args:
            stores: Entity store per entity type
            workflow_engine: Engine for approval workflows (built on the workflow store by default)
            settings: Reporting defaults (global settings by default)

        Raises:
            InvalidArgumentError: If a store for a required entity type is missing
        """
        required = (
            Employee, Project, WorkTimeEntry, ProjectTimeEntry, LeaveRequest, SickNote,
            ExpenseReport, Payroll, TravelRequest, TravelExpense, Document, ApprovalWorkflow,
            UserAccount,
        )
        missing = [entity_type.__name__ for entity_type in required if entity_type not in stores]
        if missing:
            raise InvalidArgumentError(f"Missing entity stores: {', '.join(missing)}")

        self._employees: EntityStore[Employee] = stores[Employee]
        self._projects: EntityStore[Project] = stores[Project]
        self._work_times: EntityStore[WorkTimeEntry] = stores[WorkTimeEntry]
        self._project_times: EntityStore[ProjectTimeEntry] = stores[ProjectTimeEntry]
        self._leave_requests: EntityStore[LeaveRequest] = stores[LeaveRequest]
        self._sick_notes: EntityStore[SickNote] = stores[SickNote]
        self._expense_reports: EntityStore[ExpenseReport] = stores[ExpenseReport]
        self._payrolls: EntityStore[Payroll] = stores[Payroll]
        self._travel_requests: EntityStore[TravelRequest] = stores[TravelRequest]
        self._travel_expenses: EntityStore[TravelExpense] = stores[TravelExpense]
        self._documents: EntityStore[Document] = stores[Document]
        self._workflows: EntityStore[ApprovalWorkflow] = stores[ApprovalWorkflow]
        self._users: EntityStore[UserAccount] = stores[UserAccount]
        self._workflow_engine = workflow_engine or ApprovalWorkflowEngine(self._workflows)
        self._settings = settings or get_settings()

    @property
    def workflow_engine(self) -> ApprovalWorkflowEngine:
        return self._workflow_engine

    # Employees

    def get_all_employees(self) -> List[Employee]:
        return self._employees.get_all()

    def get_employee_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._employees.get_by_id(employee_id)

    def add_or_update_employee(self, employee: Employee) -> str:
        """Insert a new employee (empty id) or replace an existing one."""
        if not employee.id:
            return self._employees.insert(employee)
        self._employees.update(employee.id, employee)
        return employee.id

    def deactivate_employee(self, employee_id: str) -> bool:
        """
        Mark an employee inactive.

        Read-modify-write without a concurrency check.

        Returns:
            False if the employee does not exist (or was already inactive),
            True once the flag has been cleared
        """
        employee = self._employees.get_by_id(employee_id)
        if employee is None:
            logger.info(f"Deactivation skipped, employee {employee_id} not found")
            return False
        employee.deactivate()
        return self._employees.update(employee_id, employee)

    # Projects

    def get_all_projects(self) -> List[Project]:
        return self._projects.get_all()

    def get_project_by_id(self, project_id: str) -> Optional[Project]:
        return self._projects.get_by_id(project_id)

    def add_or_update_project(self, project: Project) -> str:
        if not project.id:
            return self._projects.insert(project)
        self._projects.update(project.id, project)
        return project.id

    def get_projects_for_employee(self, employee_id: str) -> List[Project]:
        return self._projects.find(Filter.eq(ProjectFields.MEMBER_EMPLOYEE_IDS, employee_id))

    def get_project_team_members(self, project_id: str) -> List[Employee]:
        """Resolve the project's member references; dangling ones are skipped."""
        project = self._projects.get_by_id(project_id)
        if project is None or not project.member_employee_ids:
            return []
        members = []
        for employee_id in project.member_employee_ids:
            employee = self._employees.get_by_id(employee_id)
            if employee is None:
                logger.warning(f"Project {project_id} references unknown employee {employee_id}")
                continue
            members.append(employee)
        return members

    # Time tracking

    def add_work_time_entry(self, entry: WorkTimeEntry) -> str:
        return self._work_times.insert(entry)

    def add_project_time_entry(self, entry: ProjectTimeEntry) -> str:
        return self._project_times.insert(entry)

    def get_work_time_entries_for_employee(
        self,
        employee_id: str,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> List[WorkTimeEntry]:
        """Work time entries of one employee, optionally bounded (inclusive) by date."""
        return self._work_times.find(
            _range_filter(TimeEntryFields.EMPLOYEE_ID, employee_id, TimeEntryFields.DATE, date_from, date_to)
        )

    def get_project_times_for_project(
        self,
        project_id: str,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> List[ProjectTimeEntry]:
        """Project time entries of one project, optionally bounded (inclusive) by date."""
        return self._project_times.find(
            _range_filter(TimeEntryFields.PROJECT_ID, project_id, TimeEntryFields.DATE, date_from, date_to)
        )

    def get_total_billable_hours_for_project(
        self,
        project_id: str,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> float:
        return sum(entry.hours for entry in self.get_project_times_for_project(project_id, date_from, date_to))

    # Utilization & analytics

    def get_consultant_utilization(self, date_from: datetime, date_to: datetime) -> Dict[str, float]:
        """Worked hours in the range per active employee."""
        result: Dict[str, float] = {}
        for employee in self._employees.find(Filter.eq(EmployeeFields.IS_ACTIVE, True)):
            entries = self.get_work_time_entries_for_employee(employee.id, date_from, date_to)
            result[employee.id] = float(sum(entry.hours for entry in entries))
        return result

    def get_top_consultant_utilization(
        self,
        date_from: datetime,
        date_to: datetime,
        top_n: Optional[int] = None,
    ) -> List[Tuple[str, float]]:
        """Employees with the most worked hours, descending."""
        limit = self._settings.top_consultants_limit if top_n is None else top_n
        if limit < 0:
            raise InvalidArgumentError("top_n must not be negative")
        utilization = self.get_consultant_utilization(date_from, date_to)
        ranked = sorted(utilization.items(), key=lambda item: item[1], reverse=True)
        return ranked[:limit]

    def get_project_revenue_analytics(
        self,
        date_from: datetime,
        date_to: datetime,
        hourly_rates: Optional[Mapping[str, float]] = None,
    ) -> Dict[str, float]:
        """
        Revenue per project: booked hours in the range times the hourly rate.

        The rate comes from ``hourly_rates`` first, then the project's own
        ``hourly_rate``, then the configured default.
        """
        rates = hourly_rates or {}
        result: Dict[str, float] = {}
        for project in self._projects.get_all():
            hours = self.get_total_billable_hours_for_project(project.id, date_from, date_to)
            rate = rates.get(project.id)
            if rate is None:
                rate = project.hourly_rate if project.hourly_rate is not None else self._settings.default_hourly_rate
            result[project.id] = hours * rate
        return result

    def get_consultant_capacity_forecast(
        self,
        employee_id: str,
        date_from: datetime,
        date_to: datetime,
        planned_hours_per_day: Optional[float] = None,
    ) -> float:
        """
        Planned minus worked hours in the range.

        A positive value is remaining capacity, a negative one overtime.
        """
        per_day = self._settings.planned_hours_per_day if planned_hours_per_day is None else planned_hours_per_day
        actual = sum(entry.hours for entry in self.get_work_time_entries_for_employee(employee_id, date_from, date_to))
        planned = (span_days(date_from, date_to) + 1) * per_day
        return planned - actual

    # Absences

    def add_leave_request(self, request: LeaveRequest) -> str:
        if request.request_date is None:
            request.request_date = now()
        return self._leave_requests.insert(request)

    def add_sick_note(self, note: SickNote) -> str:
        return self._sick_notes.insert(note)

    def get_leave_requests_for_employee(self, employee_id: str) -> List[LeaveRequest]:
        return self._leave_requests.find(Filter.eq(AbsenceFields.EMPLOYEE_ID, employee_id))

    def get_sick_notes_for_employee(self, employee_id: str) -> List[SickNote]:
        return self._sick_notes.find(Filter.eq(AbsenceFields.EMPLOYEE_ID, employee_id))

    def get_absence_statistics(
        self,
        date_from: datetime,
        date_to: datetime,
        employee_id: Optional[str] = None,
    ) -> Dict[str, int]:
        """
        Vacation and sick days of absences lying entirely inside the range.

        Days are calendar days, both ends included. Restricted to one
        employee when ``employee_id`` is given.
        """
        query = Filter.gte(AbsenceFields.START_DATE, date_from) & Filter.lte(AbsenceFields.END_DATE, date_to)
        if employee_id is not None:
            query &= Filter.eq(AbsenceFields.EMPLOYEE_ID, employee_id)
        leave = self._leave_requests.find(query)
        sick = self._sick_notes.find(query)
        return {
            VACATION_DAYS: sum(request.days for request in leave),
            SICK_DAYS: sum(note.days for note in sick),
        }

    def get_employee_absence_rate(self, date_from: datetime, date_to: datetime) -> Dict[str, float]:
        """Absence days (vacation plus sick) in the range per active employee."""
        result: Dict[str, float] = {}
        for employee in self._employees.find(Filter.eq(EmployeeFields.IS_ACTIVE, True)):
            stats = self.get_absence_statistics(date_from, date_to, employee_id=employee.id)
            result[employee.id] = float(stats[VACATION_DAYS] + stats[SICK_DAYS])
        return result

    # Expenses, payroll, travel

    def add_expense_report(self, report: ExpenseReport) -> str:
        return self._expense_reports.insert(report)

    def get_expense_reports_for_employee(self, employee_id: str) -> List[ExpenseReport]:
        return self._expense_reports.find(Filter.eq(ExpenseFields.EMPLOYEE_ID, employee_id))

    def get_total_expenses_for_project(self, project_id: str) -> float:
        """Sum of all expense items explicitly attributed to the project."""
        reports = self._expense_reports.find(
            Filter.elem_match(ExpenseFields.ITEMS, Filter.eq(ExpenseFields.ITEM_PROJECT_ID, project_id))
        )
        return float(sum(item.amount for report in reports for item in report.items_for_project(project_id)))

    def add_payroll(self, payroll: Payroll) -> str:
        return self._payrolls.insert(payroll)

    def get_payroll_for_employee(self, employee_id: str) -> List[Payroll]:
        return self._payrolls.find(Filter.eq(PayrollFields.EMPLOYEE_ID, employee_id))

    def add_travel_request(self, request: TravelRequest) -> str:
        if request.request_date is None:
            request.request_date = now()
        return self._travel_requests.insert(request)

    def add_travel_expense(self, expense: TravelExpense) -> str:
        """
        Store a travel expense.

        Raises:
            InvalidArgumentError: If the referenced travel request does not exist
        """
        if self._travel_requests.get_by_id(expense.travel_request_id) is None:
            raise InvalidArgumentError(f"Travel request '{expense.travel_request_id}' not found")
        return self._travel_expenses.insert(expense)

    def get_travel_requests_for_employee(self, employee_id: str) -> List[TravelRequest]:
        return self._travel_requests.find(Filter.eq(TravelFields.EMPLOYEE_ID, employee_id))

    def get_travel_expenses_for_request(self, travel_request_id: str) -> List[TravelExpense]:
        return self._travel_expenses.find(Filter.eq(TravelFields.TRAVEL_REQUEST_ID, travel_request_id))

    # Approval workflows & documents

    def get_open_approval_workflows(self) -> List[ApprovalWorkflow]:
        return self._workflow_engine.get_open_workflows()

    def start_approval_workflow(
        self,
        entity_id: str,
        entity_type: str,
        approver_ids: Sequence[str],
    ) -> ApprovalWorkflow:
        return self._workflow_engine.start(entity_id, entity_type, approver_ids)

    def get_pending_approvals_count_for_user(self, approver_id: str) -> int:
        return self._workflow_engine.get_pending_approvals_count_for_user(approver_id)

    def submit_expense_report(self, report: ExpenseReport, approver_ids: Sequence[str]) -> ApprovalWorkflow:
        """
        Store a submitted expense report together with its approval workflow.

        Both writes share one transaction: if either fails, neither is kept
        and the report's id, status and submission date are restored.
        """
        if not approver_ids:
            raise InvalidArgumentError("An approval workflow needs at least one approver")
        generated = not report.id
        previous_status, previous_submission = report.status, report.submission_date
        report.status = ExpenseReportStatus.SUBMITTED
        if report.submission_date is None:
            report.submission_date = now()

        def action(session: Any) -> ApprovalWorkflow:
            self._expense_reports.insert(report, session=session)
            return self._workflow_engine.start(
                report.id, WorkflowEntityType.EXPENSE_REPORT, approver_ids, session=session
            )

        try:
            return self._expense_reports.execute_in_transaction(action)
        except Exception:
            if generated:
                report.id = ""
            report.status, report.submission_date = previous_status, previous_submission
            raise

    def submit_leave_request(self, request: LeaveRequest, approver_ids: Sequence[str]) -> ApprovalWorkflow:
        """Store a leave request together with its approval workflow in one transaction."""
        if not approver_ids:
            raise InvalidArgumentError("An approval workflow needs at least one approver")
        generated = not request.id
        previous_request_date = request.request_date
        if request.request_date is None:
            request.request_date = now()

        def action(session: Any) -> ApprovalWorkflow:
            self._leave_requests.insert(request, session=session)
            return self._workflow_engine.start(
                request.id, WorkflowEntityType.LEAVE_REQUEST, approver_ids, session=session
            )

        try:
            return self._leave_requests.execute_in_transaction(action)
        except Exception:
            if generated:
                request.id = ""
            request.request_date = previous_request_date
            raise

    def add_document(self, document: Document) -> str:
        if document.upload_date is None:
            document.upload_date = now()
        return self._documents.insert(document)

    def get_documents_for_entity(self, entity_id: str, entity_type: Optional[str] = None) -> List[Document]:
        """Documents linked to an entity (optionally only links of the given type)."""
        condition = Filter.eq(DocumentFields.REF_ENTITY_ID, entity_id)
        if entity_type is not None:
            condition &= Filter.eq(DocumentFields.REF_ENTITY_TYPE, entity_type)
        return self._documents.find(Filter.elem_match(DocumentFields.LINKED_ENTITIES, condition))

    # User accounts

    def create_user(self, user: UserAccount) -> str:
        return self._users.insert(user)

    def update_user(self, user: UserAccount) -> bool:
        return self._users.update(user.id, user)

    def get_user_by_id(self, user_id: str) -> Optional[UserAccount]:
        return self._users.get_by_id(user_id)

    def get_user_by_email(self, email: str) -> Optional[UserAccount]:
        """Look up a user by email; the value is normalized before matching."""
        matches = self._users.find(Filter.eq(UserFields.NORMALIZED_EMAIL, normalize(email)))
        return matches[0] if matches else None

    def get_user_by_name(self, user_name: str) -> Optional[UserAccount]:
        matches = self._users.find(Filter.eq(UserFields.NORMALIZED_USER_NAME, normalize(user_name)))
        return matches[0] if matches else None

    # Administration

    def ensure_indexes(self) -> None:
        """Declare the secondary indexes the queries above rely on."""
        self._employees.create_index(EmployeeFields.IS_ACTIVE)
        self._employees.create_index(EmployeeFields.PERSONNEL_NUMBER)
        self._projects.create_index(ProjectFields.MEMBER_EMPLOYEE_IDS)
        self._work_times.create_index(TimeEntryFields.EMPLOYEE_ID)
        self._work_times.create_index(TimeEntryFields.DATE)
        self._project_times.create_index(TimeEntryFields.PROJECT_ID)
        self._project_times.create_index(TimeEntryFields.DATE)
        self._leave_requests.create_index(AbsenceFields.EMPLOYEE_ID)
        self._leave_requests.create_index(AbsenceFields.START_DATE)
        self._sick_notes.create_index(AbsenceFields.EMPLOYEE_ID)
        self._sick_notes.create_index(AbsenceFields.START_DATE)
        self._expense_reports.create_index(ExpenseFields.EMPLOYEE_ID)
        self._expense_reports.create_index(f"{ExpenseFields.ITEMS}.{ExpenseFields.ITEM_PROJECT_ID}")
        self._payrolls.create_index(PayrollFields.EMPLOYEE_ID)
        self._payrolls.create_index(PayrollFields.PERIOD_START, ascending=False)
        self._travel_requests.create_index(TravelFields.EMPLOYEE_ID)
        self._travel_expenses.create_index(TravelFields.TRAVEL_REQUEST_ID)
        self._documents.create_index(f"{DocumentFields.LINKED_ENTITIES}.{DocumentFields.REF_ENTITY_ID}")
        self._workflows.create_index(WorkflowFields.STATUS)
        self._workflows.create_index(f"{WorkflowFields.STEPS}.{WorkflowFields.STEP_APPROVER_ID}")
        self._users.create_index(UserFields.NORMALIZED_EMAIL)
        self._users.create_index(UserFields.NORMALIZED_USER_NAME)
        logger.info("Entity store indexes declared")

    def is_db_online(self) -> bool:
        return self._employees.ping()
