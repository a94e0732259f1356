"""
MongoDB Client
==============

Process-wide MongoDB client for database connections.

The pymongo client owns a thread-safe connection pool, so one manager is
shared by every entity store.
"""
import logging
from typing import Optional
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.collection import Collection

from hr_platform.core.config import get_settings
from hr_platform.core.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


class MongoClientManager:
    """
    MongoDB client manager.

    Manages the MongoDB connection and provides access to collections.
    An already constructed client (e.g. a test double) may be injected.
    """

    def __init__(
        self,
        connection_string: Optional[str] = None,
        database_name: Optional[str] = None,
        client: Optional[MongoClient] = None,
    ) -> None:
        settings = get_settings()
        self._connection_string = connection_string or settings.mongo_uri
        self._database_name = settings.mongo_database_name if database_name is None else database_name
        if not self._database_name or not self._database_name.strip():
            raise InvalidArgumentError("Database name cannot be empty")
        self._server_selection_timeout_ms = settings.server_selection_timeout_ms
        self._client: Optional[MongoClient] = client
        self._database: Optional[Database] = None

    def _initialize_client(self) -> None:
        """Initialize MongoDB client connection."""
        if self._client is None:
            self._client = MongoClient(
                self._connection_string,
                serverSelectionTimeoutMS=self._server_selection_timeout_ms,
            )
            logger.info("Connected to MongoDB: %s", self._database_name)
        self._database = self._client[self._database_name]

    @property
    def client(self) -> MongoClient:
        if self._database is None:
            self._initialize_client()
        return self._client

    @property
    def database_name(self) -> str:
        return self._database_name

    def get_database(self) -> Database:
        """Get MongoDB database instance."""
        if self._database is None:
            self._initialize_client()
        return self._database

    def get_collection(self, collection_name: str) -> Collection:
        """
        Get a MongoDB collection.

        Args:
            collection_name: Name of the collection

        Returns:
            MongoDB Collection object

        Raises:
            InvalidArgumentError: If the collection name is empty
        """
        if not collection_name or not collection_name.strip():
            raise InvalidArgumentError("Collection name cannot be empty")
        database = self.get_database()
        return database[collection_name]

    def close(self) -> None:
        """Close MongoDB connection."""
        if self._client:
            self._client.close()
            self._client = None
            self._database = None


# Global client manager instance (singleton pattern)
_client_manager: Optional[MongoClientManager] = None


def get_mongo_client() -> MongoClientManager:
    """Get the process-wide MongoDB client manager."""
    global _client_manager
    if _client_manager is None:
        _client_manager = MongoClientManager()
    return _client_manager
