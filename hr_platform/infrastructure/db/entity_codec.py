"""
Entity Codec
============

Converts domain dataclasses to MongoDB documents and back.

pydantic walks nested dataclasses and lists in both directions, so one codec
serves every entity type. Two storage-specific rules apply:

- ``entity.id`` (string) is stored as ``_id`` (ObjectId)
- datetimes are stored as naive UTC with millisecond precision; the entity
  being written is normalized the same way, so it compares equal to what a
  later read returns
"""
from dataclasses import fields, is_dataclass
from datetime import datetime
from typing import Any, Dict, Generic, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from hr_platform.core.exceptions import MalformedEntityError
from hr_platform.domain.constants.common_fields import CommonFields
from hr_platform.domain.repositories.filters import to_object_id
from hr_platform.utils.datetime_utils import to_storage

T = TypeVar("T")


def _normalized(value: Any) -> Any:
    """Storage form of a field value; dataclasses are normalized in place."""
    if isinstance(value, datetime):
        return to_storage(value)
    if isinstance(value, list):
        return [_normalized(item) for item in value]
    if is_dataclass(value) and not isinstance(value, type):
        normalize_datetimes(value)
    return value


def normalize_datetimes(entity: Any) -> None:
    """Bring every datetime of ``entity`` (nested ones included) to the storage convention."""
    for entity_field in fields(entity):
        value = getattr(entity, entity_field.name)
        normalized = _normalized(value)
        if isinstance(value, datetime):
            setattr(entity, entity_field.name, normalized)
        elif isinstance(value, list):
            # keep the caller's list object
            value[:] = normalized


class EntityCodec(Generic[T]):
    """Document mapper for one entity type."""

    def __init__(self, entity_type: Type[T]) -> None:
        self.entity_type = entity_type
        self._adapter = TypeAdapter(entity_type)

    def to_document(self, entity: T) -> Dict[str, Any]:
        """
        Convert entity to MongoDB document.

        Normalizes the entity's datetimes in place before dumping it.
        """
        normalize_datetimes(entity)
        doc = self._adapter.dump_python(entity)
        entity_id = doc.pop(CommonFields.ID, "")
        if entity_id:
            doc = {CommonFields.MONGO_ID: to_object_id(entity_id), **doc}
        return doc

    def to_entity(self, doc: Dict[str, Any]) -> T:
        """Convert MongoDB document to entity."""
        data = dict(doc)  # Make a copy to avoid modifying original
        data[CommonFields.ID] = str(data.pop(CommonFields.MONGO_ID))
        try:
            return self._adapter.validate_python(data)
        except (ValidationError, ValueError) as exc:
            raise MalformedEntityError(
                f"Stored {self.entity_type.__name__} {data[CommonFields.ID]} is malformed: {exc}"
            ) from exc
