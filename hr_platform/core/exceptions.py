"""
Platform Exceptions
===================

Error taxonomy shared by the persistence layer and the domain services.

Lookups that find nothing are not errors: they return ``None`` or an empty
list. ``update``/``delete`` report a boolean instead of raising.
"""


class HRPlatformError(Exception):
    """Base class for all platform errors."""


class InvalidArgumentError(HRPlatformError, ValueError):
    """A caller supplied an unusable argument (empty names, negative paging, ...)."""


class InvalidIdError(InvalidArgumentError):
    """An identifier string is not a valid ObjectId encoding."""


class MalformedEntityError(InvalidArgumentError):
    """An entity violates one of its own invariants."""


class WorkflowStateError(InvalidArgumentError):
    """An approval decision is not allowed in the workflow's current state."""


class StorageError(HRPlatformError):
    """Connectivity, constraint or transaction failure at the storage boundary."""
