"""
Approval Workflow Engine
========================

Creates and queries multi-step approval workflows.

Decisions are recorded with ``record_decision``; the workflow status only
changes through that call. Every query rescans the stored workflows.
"""
import logging
from typing import Any, List, Sequence

from hr_platform.core.exceptions import InvalidArgumentError, WorkflowStateError
from hr_platform.domain.constants.workflow_fields import WorkflowFields
from hr_platform.domain.models.workflow import (
    ApprovalDecision,
    ApprovalStep,
    ApprovalWorkflow,
    WorkflowStatus,
)
from hr_platform.domain.repositories.entity_store import EntityStore
from hr_platform.domain.repositories.filters import Filter
from hr_platform.utils.datetime_utils import now

logger = logging.getLogger(__name__)


class ApprovalWorkflowEngine:
    """State machine over ApprovalWorkflow documents."""

    def __init__(self, workflow_store: EntityStore[ApprovalWorkflow]):
        """
        Initialize engine with its store.

        Args:
            workflow_store: Store for approval workflows
        """
        self._workflows = workflow_store

    def start(
        self,
        entity_id: str,
        entity_type: str,
        approver_ids: Sequence[str],
        session: Any = None,
    ) -> ApprovalWorkflow:
        """
        Start a workflow with one pending step per approver.

        Args:
            entity_id: Id of the entity to approve
            entity_type: WorkflowEntityType tag of that entity
            approver_ids: Approvers in approval order
            session: Optional transactional session

        Returns:
            The stored workflow (status Open, steps numbered 1..N)

        Raises:
            InvalidArgumentError: If no approver is given
        """
        if not approver_ids:
            raise InvalidArgumentError("An approval workflow needs at least one approver")
        steps = [
            ApprovalStep(step_number=index, approver_id=approver_id)
            for index, approver_id in enumerate(approver_ids, start=1)
        ]
        workflow = ApprovalWorkflow(
            entity_id=entity_id,
            entity_type=entity_type,
            steps=steps,
            status=WorkflowStatus.OPEN,
            created_at=now(),
        )
        self._workflows.insert(workflow, session=session)
        logger.info(f"Approval workflow {workflow.id} started for {entity_type} {entity_id} with {len(steps)} steps")
        return workflow

    def get_open_workflows(self) -> List[ApprovalWorkflow]:
        """All workflows with status Open."""
        return self._workflows.find(Filter.eq(WorkflowFields.STATUS, WorkflowStatus.OPEN))

    def get_workflows_for_entity(self, entity_id: str) -> List[ApprovalWorkflow]:
        return self._workflows.find(Filter.eq(WorkflowFields.ENTITY_ID, entity_id))

    def get_pending_approvals_count_for_user(self, approver_id: str) -> int:
        """
        Count pending steps assigned to an approver.

        Scans every workflow that is still open (Open or InProgress).
        """
        active = self._workflows.find(Filter.in_(WorkflowFields.STATUS, WorkflowStatus.ACTIVE))
        return sum(len(workflow.pending_steps_for(approver_id)) for workflow in active)

    def record_decision(
        self,
        workflow_id: str,
        step_number: int,
        decision: str,
        comment: str = "",
    ) -> ApprovalWorkflow:
        """
        Record an approver's decision on the next pending step.

        Steps are decided strictly in order. A rejection ends the workflow as
        Rejected; approving the last step completes it; any other approval
        moves it to InProgress. This is a read-modify-write without a
        concurrency check: the last writer wins.

        Raises:
            InvalidArgumentError: If the workflow does not exist or the decision is unknown
            WorkflowStateError: If the workflow is closed or the step is not next in line
        """
        if decision not in (ApprovalDecision.APPROVED, ApprovalDecision.REJECTED):
            raise InvalidArgumentError(f"Unknown approval decision '{decision}'")

        workflow = self._workflows.get_by_id(workflow_id)
        if workflow is None:
            raise InvalidArgumentError(f"Approval workflow '{workflow_id}' not found")
        if not workflow.is_active:
            raise WorkflowStateError(f"Approval workflow {workflow_id} is already {workflow.status}")

        step = workflow.next_pending_step()
        if step is None or step.step_number != step_number:
            expected = step.step_number if step else None
            raise WorkflowStateError(
                f"Step {step_number} of workflow {workflow_id} cannot be decided now (next pending step: {expected})"
            )

        decided_at = now()
        step.decide(decision, decided_at, comment)
        if decision == ApprovalDecision.REJECTED:
            workflow.status = WorkflowStatus.REJECTED
            workflow.completed_at = decided_at
        elif workflow.next_pending_step() is None:
            workflow.status = WorkflowStatus.COMPLETED
            workflow.completed_at = decided_at
        else:
            workflow.status = WorkflowStatus.IN_PROGRESS

        self._workflows.update(workflow_id, workflow)
        logger.info(f"Workflow {workflow_id} step {step_number} {decision.lower()}; status {workflow.status}")
        return workflow
