"""Entity store contract and query filters."""
from .entity_store import EntityStore
from .filters import Filter, Sort

__all__ = ["EntityStore", "Filter", "Sort"]
