from typing import TYPE_CHECKING, Optional
from ...infrastructure.db.mongo_connection import MongoClientManager, get_mongo_client

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for all DB connections"""

    @staticmethod
    def register(container: "BaseContainer", client_manager: Optional[MongoClientManager] = None) -> None:
        """
        Register the database connection in the container.
        This is the ONLY place where database connections are registered.
        Passing a client manager overrides the process-wide one (used by tests).
        """
        container.register_singleton("mongo_client", client_manager or get_mongo_client())
