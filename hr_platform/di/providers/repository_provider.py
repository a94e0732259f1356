from typing import TYPE_CHECKING, Type
from ...domain.constants.collections import ENTITY_COLLECTIONS
from ...infrastructure.db.mongo_entity_store import MongoEntityStore

if TYPE_CHECKING:
    from ..base_container import BaseContainer


def store_key(entity_type: Type) -> str:
    """Registry key of the entity store for an entity type"""
    return f"store:{entity_type.__name__}"


class RepositoryProvider:
    """Repository registration provider - one entity store per entity type"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register one MongoEntityStore per entity type.
        All stores share the client registered by the database provider.
        """
        mongo_client = container.get("mongo_client")

        for entity_type, collection_name in ENTITY_COLLECTIONS.items():
            container.register_singleton(
                store_key(entity_type),
                MongoEntityStore(entity_type, collection_name, mongo_client),
            )
