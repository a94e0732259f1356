"""
MongoDB Entity Store
====================

Concrete implementation of EntityStore using MongoDB.

One class serves every entity type; the DI container creates one instance
per collection. pymongo failures surface as StorageError and are never
retried here.
"""
import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Type, TypeVar

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from hr_platform.core.exceptions import InvalidArgumentError, StorageError
from hr_platform.domain.constants.common_fields import CommonFields
from hr_platform.domain.repositories.entity_store import EntityStore
from hr_platform.domain.repositories.filters import Filter, Sort, to_object_id
from hr_platform.infrastructure.db.entity_codec import EntityCodec
from hr_platform.infrastructure.db.mongo_connection import MongoClientManager, get_mongo_client

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def _session_kwargs(session: Any) -> Dict[str, Any]:
    return {"session": session} if session is not None else {}


class MongoEntityStore(EntityStore[T]):
    """MongoDB implementation of EntityStore for a single collection."""

    def __init__(
        self,
        entity_type: Type[T],
        collection_name: str,
        client_manager: Optional[MongoClientManager] = None,
    ) -> None:
        """
        Initialize store for one entity type.

        Args:
            entity_type: Dataclass stored in the collection
            collection_name: MongoDB collection name
            client_manager: Shared client manager (process-wide one by default)

        Raises:
            InvalidArgumentError: If the collection name is empty
        """
        if not collection_name or not collection_name.strip():
            raise InvalidArgumentError("Collection name cannot be empty")
        self.entity_type = entity_type
        self.collection_name = collection_name
        self._client_manager = client_manager or get_mongo_client()
        self._collection: Collection = self._client_manager.get_collection(collection_name)
        self._codec: EntityCodec[T] = EntityCodec(entity_type)

    @contextmanager
    def _storage_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except PyMongoError as exc:
            logger.error(f"{operation} on '{self.collection_name}' failed: {exc}")
            raise StorageError(f"{operation} on '{self.collection_name}' failed: {exc}") from exc

    # CRUD

    def insert(self, entity: T, session: Any = None) -> str:
        """Insert an entity, assigning an id when it has none."""
        generated = not entity.id
        if generated:
            entity.id = str(ObjectId())
        doc = self._codec.to_document(entity)
        try:
            with self._storage_errors("insert"):
                self._collection.insert_one(doc, **_session_kwargs(session))
        except StorageError:
            if generated:
                entity.id = ""
            raise
        return entity.id

    def insert_many(self, entities: Sequence[T], session: Any = None) -> List[str]:
        """Insert a batch of entities in one ordered bulk write."""
        if not entities:
            return []
        generated = [entity for entity in entities if not entity.id]
        for entity in generated:
            entity.id = str(ObjectId())
        docs = [self._codec.to_document(entity) for entity in entities]
        try:
            with self._storage_errors("insert_many"):
                self._collection.insert_many(docs, ordered=True, **_session_kwargs(session))
        except StorageError:
            for entity in generated:
                entity.id = ""
            raise
        return [entity.id for entity in entities]

    def get_by_id(self, entity_id: str, session: Any = None) -> Optional[T]:
        """Find an entity by id."""
        object_id = to_object_id(entity_id)
        with self._storage_errors("get_by_id"):
            doc = self._collection.find_one({CommonFields.MONGO_ID: object_id}, **_session_kwargs(session))
        return self._codec.to_entity(doc) if doc else None

    def get_all(self, session: Any = None) -> List[T]:
        """Return every entity in the collection."""
        return self.find(Filter.empty(), session=session)

    def update(self, entity_id: str, entity: T, session: Any = None) -> bool:
        """
        Replace the whole document; True only if it actually changed.

        Raises:
            InvalidArgumentError: If the entity carries the id of another document
        """
        object_id = to_object_id(entity_id)
        if entity.id and entity.id != entity_id:
            raise InvalidArgumentError(f"Entity id '{entity.id}' does not match '{entity_id}'")
        entity.id = entity_id
        doc = self._codec.to_document(entity)
        doc.pop(CommonFields.MONGO_ID, None)
        with self._storage_errors("update"):
            result = self._collection.replace_one(
                {CommonFields.MONGO_ID: object_id}, doc, upsert=False, **_session_kwargs(session)
            )
        return result.modified_count > 0

    def delete(self, entity_id: str, session: Any = None) -> bool:
        """Delete an entity by id."""
        object_id = to_object_id(entity_id)
        with self._storage_errors("delete"):
            result = self._collection.delete_one({CommonFields.MONGO_ID: object_id}, **_session_kwargs(session))
        return result.deleted_count > 0

    # Queries

    def find(self, query: Filter, session: Any = None) -> List[T]:
        """Find all entities matching the filter."""
        with self._storage_errors("find"):
            docs = list(self._collection.find(query.to_query(), **_session_kwargs(session)))
        return [self._codec.to_entity(doc) for doc in docs]

    def search(self, field: str, term: str, session: Any = None) -> List[T]:
        """Case-insensitive regex search on one field."""
        return self.find(Filter.regex(field, term, ignore_case=True), session=session)

    def count(self, query: Optional[Filter] = None, session: Any = None) -> int:
        """Count entities matching the filter (all when omitted)."""
        with self._storage_errors("count"):
            return self._collection.count_documents(
                query.to_query() if query is not None else {}, **_session_kwargs(session)
            )

    def get_paged(
        self,
        query: Optional[Filter],
        skip: int,
        take: int,
        sort: Optional[Sort] = None,
        session: Any = None,
    ) -> List[T]:
        """Return entities [skip, skip + take) of the (sorted) result."""
        if skip < 0 or take < 0:
            raise InvalidArgumentError(f"skip and take must not be negative (skip={skip}, take={take})")
        # limit(0) means "no limit" to MongoDB
        if take == 0:
            return []
        with self._storage_errors("get_paged"):
            cursor = self._collection.find(
                query.to_query() if query is not None else {}, **_session_kwargs(session)
            )
            if sort is not None:
                cursor = cursor.sort(sort.to_spec())
            docs = list(cursor.skip(skip).limit(take))
        return [self._codec.to_entity(doc) for doc in docs]

    # Indexes & admin

    def create_index(self, field: str, ascending: bool = True) -> str:
        """Create an index on one field (no-op if it already exists)."""
        with self._storage_errors("create_index"):
            name = self._collection.create_index([(field, ASCENDING if ascending else DESCENDING)])
        logger.debug(f"Index '{name}' declared on '{self.collection_name}'")
        return name

    def list_indexes(self) -> List[str]:
        """List index names of the collection."""
        with self._storage_errors("list_indexes"):
            return [index["name"] for index in self._collection.list_indexes()]

    def list_collections(self) -> List[str]:
        """List all collection names in the database."""
        with self._storage_errors("list_collections"):
            return self._client_manager.get_database().list_collection_names()

    def drop_collection(self, collection_name: str) -> None:
        """Drop a collection of the same database."""
        if not collection_name or not collection_name.strip():
            raise InvalidArgumentError("Collection name cannot be empty")
        with self._storage_errors("drop_collection"):
            self._client_manager.get_database().drop_collection(collection_name)
        logger.warning(f"Collection '{collection_name}' dropped")

    # Transactions

    def execute_in_transaction(self, action: Callable[[Any], R]) -> R:
        """
        Run ``action`` with a transactional session.

        Only writes that pass the session to a store take part in the
        transaction. On any failure the transaction is aborted and the error
        re-raised; pymongo errors are wrapped in StorageError.
        """
        with self._storage_errors("start_session"):
            session = self._client_manager.client.start_session()
        with session:
            session.start_transaction()
            try:
                result = action(session)
                session.commit_transaction()
            except PyMongoError as exc:
                self._abort(session)
                logger.error(f"Transaction on '{self.collection_name}' aborted: {exc}")
                raise StorageError(f"Transaction on '{self.collection_name}' failed: {exc}") from exc
            except Exception:
                self._abort(session)
                logger.warning(f"Transaction on '{self.collection_name}' aborted by its action")
                raise
        return result

    @staticmethod
    def _abort(session: Any) -> None:
        if not session.in_transaction:
            return
        try:
            session.abort_transaction()
        except PyMongoError as exc:
            # Keep raising the failure that caused the abort
            logger.error(f"Abort of transaction failed: {exc}")

    def ping(self) -> bool:
        """Check database liveness; never raises."""
        try:
            self._client_manager.get_database().command("ping")
            return True
        except Exception as exc:
            logger.debug(f"Ping failed: {exc}")
            return False
