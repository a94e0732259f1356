"""
Entity Store Interface
======================

Generic repository contract, implemented once and instantiated per entity
type. Implementations should be in the infrastructure layer.

Every read and write accepts an optional ``session``. Only calls that pass
the session handed out by ``execute_in_transaction`` take part in that
transaction; the type does not enforce this.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, List, Optional, Sequence, Type, TypeVar

from hr_platform.domain.repositories.filters import Filter, Sort

T = TypeVar("T")
R = TypeVar("R")


class EntityStore(ABC, Generic[T]):
    """
    Abstract repository for one entity type.

    This interface defines the contract for entity persistence.
    Concrete implementations should be in the infrastructure layer.
    """

    entity_type: Type[T]

    @abstractmethod
    def insert(self, entity: T, session: Any = None) -> str:
        """
        Insert a new entity.

        Assigns a fresh identifier when ``entity.id`` is empty and writes it
        back onto the entity.

        Args:
            entity: Entity to store

        Returns:
            The entity's identifier

        Raises:
            StorageError: On connectivity or constraint failure
        """
        pass

    @abstractmethod
    def insert_many(self, entities: Sequence[T], session: Any = None) -> List[str]:
        """
        Insert a batch of entities.

        The batch succeeds or fails as a whole at the storage boundary;
        failed items are not retried individually.
        """
        pass

    @abstractmethod
    def get_by_id(self, entity_id: str, session: Any = None) -> Optional[T]:
        """
        Find an entity by its identifier.

        Returns:
            Entity if found, None otherwise

        Raises:
            InvalidIdError: If the identifier is malformed
        """
        pass

    @abstractmethod
    def get_all(self, session: Any = None) -> List[T]:
        """Return every entity. Unbounded; callers are responsible for the cost."""
        pass

    @abstractmethod
    def update(self, entity_id: str, entity: T, session: Any = None) -> bool:
        """
        Replace the stored document with ``entity``.

        Returns:
            True if a document was modified. False when nothing matched or
            the stored document already equals ``entity``.

        Raises:
            InvalidArgumentError: If ``entity.id`` is set to a different id
        """
        pass

    @abstractmethod
    def delete(self, entity_id: str, session: Any = None) -> bool:
        """Remove an entity. Returns True if a document was removed."""
        pass

    @abstractmethod
    def find(self, query: Filter, session: Any = None) -> List[T]:
        """Return all entities matching ``query``."""
        pass

    @abstractmethod
    def search(self, field: str, term: str, session: Any = None) -> List[T]:
        """Case-insensitive pattern match of ``term`` against one field."""
        pass

    @abstractmethod
    def count(self, query: Optional[Filter] = None, session: Any = None) -> int:
        """Count entities matching ``query`` (all entities when omitted)."""
        pass

    @abstractmethod
    def get_paged(
        self,
        query: Optional[Filter],
        skip: int,
        take: int,
        sort: Optional[Sort] = None,
        session: Any = None,
    ) -> List[T]:
        """
        Return one page of matching entities.

        ``sort`` is applied before skipping. Without a stable sort, page
        boundaries are not deterministic under concurrent writes.
        """
        pass

    @abstractmethod
    def create_index(self, field: str, ascending: bool = True) -> str:
        """Declare an index on ``field``. Re-declaring an existing index is a no-op."""
        pass

    @abstractmethod
    def list_indexes(self) -> List[str]:
        """Return the names of the collection's indexes."""
        pass

    @abstractmethod
    def execute_in_transaction(self, action: Callable[[Any], R]) -> R:
        """
        Run ``action(session)`` inside a transaction.

        Commits when ``action`` returns; aborts and re-raises when it fails.
        """
        pass

    @abstractmethod
    def ping(self) -> bool:
        """Liveness probe. Never raises."""
        pass
