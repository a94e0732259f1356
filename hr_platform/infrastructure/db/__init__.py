"""MongoDB connection, document codec and generic entity store."""
from .mongo_connection import MongoClientManager, get_mongo_client
from .mongo_entity_store import MongoEntityStore

__all__ = ["MongoClientManager", "MongoEntityStore", "get_mongo_client"]
