# Standard library imports
from typing import Dict, Optional, Type

# Local application imports
from .base_container import BaseContainer
from .providers import (
    DatabaseProvider,
    RepositoryProvider,
    ServiceProvider,
)
from .providers.repository_provider import store_key
from ..core.logging_config import configure_logging
from ..domain.constants.collections import ENTITY_COLLECTIONS
from ..domain.repositories.entity_store import EntityStore
from ..infrastructure.db.mongo_connection import MongoClientManager


class DIContainer(BaseContainer):
    """
    Main dependency injection container.
    Composes all providers in the correct order.

    Registration order is important:
    1. Database connections (DatabaseProvider)
    2. Entity stores (RepositoryProvider) - depend on database
    3. Services (ServiceProvider) - depend on entity stores
    """

    def __init__(self, client_manager: Optional[MongoClientManager] = None) -> None:
        super().__init__()
        self.setup(client_manager)

    def setup(self, client_manager: Optional[MongoClientManager] = None) -> None:
        """
        Setup dependency registrations by composing all providers.
        Order matters: database → stores → services
        """
        DatabaseProvider.register(self, client_manager)
        RepositoryProvider.register(self)
        ServiceProvider.register(self)

    def store_for(self, entity_type: Type) -> EntityStore:
        """Entity store registered for an entity type"""
        return self.get(store_key(entity_type))

    def stores(self) -> Dict[Type, EntityStore]:
        """All registered entity stores keyed by entity type"""
        return {entity_type: self.store_for(entity_type) for entity_type in ENTITY_COLLECTIONS}


# Global container instance (singleton pattern)
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """
    Get the global DI container instance (singleton pattern)

    Returns:
        DIContainer instance with all dependencies registered
    """
    global _container
    if _container is None:
        configure_logging()
        _container = DIContainer()
    return _container
