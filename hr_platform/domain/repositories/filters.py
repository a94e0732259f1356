"""
Query Filters
=============

Composable predicates and sort orders for entity stores.

Every constructor maps 1:1 onto a MongoDB query operator, so a composed
filter is always evaluated by the database; there is no client-side
filtering fallback. The logical ``id`` field is translated to ``_id`` and
its values to ``ObjectId``.
"""
from typing import Any, Dict, Iterable, List, Optional, Tuple

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING

from hr_platform.core.exceptions import InvalidIdError
from hr_platform.domain.constants.common_fields import CommonFields


def to_object_id(value: Any) -> ObjectId:
    """
    Convert an identifier string to ObjectId.

    Raises:
        InvalidIdError: If the value is not a valid ObjectId encoding
    """
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidIdError(f"'{value}' is not a valid identifier")
    return ObjectId(value)


def _field_name(field: str) -> str:
    return CommonFields.MONGO_ID if field == CommonFields.ID else field


def _field_value(field: str, value: Any) -> Any:
    if field != CommonFields.ID:
        return value
    if isinstance(value, (list, tuple, set)):
        return [to_object_id(v) for v in value]
    return to_object_id(value)


class Filter:
    """Immutable predicate over one entity type's documents."""

    __slots__ = ("_query",)

    def __init__(self, query: Optional[Dict[str, Any]] = None) -> None:
        self._query: Dict[str, Any] = dict(query or {})

    # Primitives

    @classmethod
    def empty(cls) -> "Filter":
        return cls()

    @classmethod
    def by_id(cls, entity_id: str) -> "Filter":
        return cls.eq(CommonFields.ID, entity_id)

    @classmethod
    def eq(cls, field: str, value: Any) -> "Filter":
        return cls({_field_name(field): _field_value(field, value)})

    @classmethod
    def ne(cls, field: str, value: Any) -> "Filter":
        return cls._operator(field, "$ne", value)

    @classmethod
    def gt(cls, field: str, value: Any) -> "Filter":
        return cls._operator(field, "$gt", value)

    @classmethod
    def gte(cls, field: str, value: Any) -> "Filter":
        return cls._operator(field, "$gte", value)

    @classmethod
    def lt(cls, field: str, value: Any) -> "Filter":
        return cls._operator(field, "$lt", value)

    @classmethod
    def lte(cls, field: str, value: Any) -> "Filter":
        return cls._operator(field, "$lte", value)

    @classmethod
    def in_(cls, field: str, values: Iterable[Any]) -> "Filter":
        return cls._operator(field, "$in", list(values))

    @classmethod
    def regex(cls, field: str, pattern: str, ignore_case: bool = True) -> "Filter":
        condition: Dict[str, Any] = {"$regex": pattern}
        if ignore_case:
            condition["$options"] = "i"
        return cls({_field_name(field): condition})

    @classmethod
    def elem_match(cls, field: str, condition: "Filter") -> "Filter":
        """Match documents whose array ``field`` has an element satisfying ``condition``."""
        return cls({_field_name(field): {"$elemMatch": condition.to_query()}})

    @classmethod
    def _operator(cls, field: str, operator: str, value: Any) -> "Filter":
        return cls({_field_name(field): {operator: _field_value(field, value)}})

    # Composition

    @classmethod
    def and_(cls, *filters: "Filter") -> "Filter":
        parts = [f.to_query() for f in filters if not f.is_empty]
        if not parts:
            return cls()
        if len(parts) == 1:
            return cls(parts[0])
        return cls({"$and": parts})

    @classmethod
    def or_(cls, *filters: "Filter") -> "Filter":
        parts = [f.to_query() for f in filters]
        if not parts:
            return cls()
        if len(parts) == 1:
            return cls(parts[0])
        return cls({"$or": parts})

    def __and__(self, other: "Filter") -> "Filter":
        return Filter.and_(self, other)

    def __or__(self, other: "Filter") -> "Filter":
        return Filter.or_(self, other)

    @property
    def is_empty(self) -> bool:
        return not self._query

    def to_query(self) -> Dict[str, Any]:
        """Render the MongoDB query document."""
        return dict(self._query)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Filter) and self._query == other._query

    def __hash__(self) -> int:
        return hash(repr(self._query))

    def __repr__(self) -> str:
        return f"Filter({self._query!r})"


class Sort:
    """Ordered list of sort keys."""

    __slots__ = ("_keys",)

    def __init__(self, keys: Optional[List[Tuple[str, int]]] = None) -> None:
        self._keys: List[Tuple[str, int]] = list(keys or [])

    @classmethod
    def ascending(cls, field: str) -> "Sort":
        return cls([(_field_name(field), ASCENDING)])

    @classmethod
    def descending(cls, field: str) -> "Sort":
        return cls([(_field_name(field), DESCENDING)])

    def then_by(self, field: str, ascending: bool = True) -> "Sort":
        return Sort(self._keys + [(_field_name(field), ASCENDING if ascending else DESCENDING)])

    def to_spec(self) -> List[Tuple[str, int]]:
        """Render the pymongo sort specification."""
        return list(self._keys)

    def __repr__(self) -> str:
        return f"Sort({self._keys!r})"
