from typing import TYPE_CHECKING
from .repository_provider import store_key
from ...core.config import get_settings
from ...domain.constants.collections import ENTITY_COLLECTIONS
from ...domain.models import ApprovalWorkflow
from ...application.services.approval_workflow_engine import ApprovalWorkflowEngine
from ...application.services.domain_manager import DomainManager
from ...application.services.user_account_service import UserAccountService

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class ServiceProvider:
    """Service provider - registers the workflow engine, domain manager and user service"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register application services.
        Services are created with entity stores from the container.
        """
        engine = ApprovalWorkflowEngine(container.get(store_key(ApprovalWorkflow)))
        container.register_singleton(ApprovalWorkflowEngine, engine)

        stores = {entity_type: container.get(store_key(entity_type)) for entity_type in ENTITY_COLLECTIONS}
        manager = DomainManager(stores, workflow_engine=engine, settings=get_settings())
        container.register_singleton(DomainManager, manager)

        container.register_singleton(UserAccountService, UserAccountService(manager))
