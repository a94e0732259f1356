"""
User Account Service
====================

Narrow user-store contract consumed by the authentication layer.

Writes never raise to the caller: storage failures come back as a failed
IdentityResult, which is what an identity framework expects from its store.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from hr_platform.core.exceptions import HRPlatformError
from hr_platform.domain.models.user_account import UserAccount
from hr_platform.application.services.domain_manager import DomainManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityResult:
    succeeded: bool
    errors: List[str] = field(default_factory=list)

    @classmethod
    def success(cls) -> "IdentityResult":
        return cls(succeeded=True)

    @classmethod
    def failed(cls, *errors: str) -> "IdentityResult":
        return cls(succeeded=False, errors=list(errors))


class UserAccountService:
    """User store adapter over the domain manager."""

    def __init__(self, manager: DomainManager):
        self._manager = manager

    def create(self, user: UserAccount) -> IdentityResult:
        return self._execute("create", lambda: self._manager.create_user(user))

    def update(self, user: UserAccount) -> IdentityResult:
        # An unchanged account is still a successful update
        return self._execute("update", lambda: self._manager.update_user(user))

    def delete(self, user: UserAccount) -> IdentityResult:
        """Accounts are never removed; reported as success."""
        logger.info(f"Delete requested for user {user.id}; accounts are not deleted")
        return IdentityResult.success()

    def find_by_id(self, user_id: str) -> Optional[UserAccount]:
        return self._manager.get_user_by_id(user_id)

    def find_by_name(self, normalized_user_name: str) -> Optional[UserAccount]:
        return self._manager.get_user_by_name(normalized_user_name)

    def find_by_email(self, normalized_email: str) -> Optional[UserAccount]:
        return self._manager.get_user_by_email(normalized_email)

    @staticmethod
    def _execute(operation: str, action: Callable[[], object]) -> IdentityResult:
        try:
            action()
        except HRPlatformError as exc:
            logger.error(f"User {operation} failed: {exc}", exc_info=True)
            return IdentityResult.failed("Database error.")
        return IdentityResult.success()
