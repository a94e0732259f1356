import pytest

from hr_platform.application.services.approval_workflow_engine import ApprovalWorkflowEngine
from hr_platform.application.services.domain_manager import DomainManager
from hr_platform.application.services.user_account_service import UserAccountService
from hr_platform.domain.constants.collections import ENTITY_COLLECTIONS, Collections
from hr_platform.domain.models import Employee, UserAccount


def test_one_store_per_entity_type(container):
    stores = container.stores()

    assert set(stores) == set(ENTITY_COLLECTIONS)
    assert container.store_for(Employee) is stores[Employee]


def test_services_share_stores(container, mongo_manager):
    manager = container.get(DomainManager)

    assert container.get("mongo_client") is mongo_manager
    assert manager.workflow_engine is container.get(ApprovalWorkflowEngine)
    assert isinstance(container.get(UserAccountService), UserAccountService)


def test_stores_write_to_their_collections(container, mongo_manager):
    user = UserAccount(user_name="jdoe", email="jdoe@example.com")
    container.get(DomainManager).create_user(user)

    assert mongo_manager.get_collection(Collections.USER_ACCOUNTS).count_documents({}) == 1


def test_unknown_registration(container):
    assert not container.has("missing")
    with pytest.raises(ValueError):
        container.get("missing")
