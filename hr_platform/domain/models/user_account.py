"""
User Account Model
==================

Login account consumed by the authentication layer.
"""
from typing import Optional
from dataclasses import dataclass


def normalize(value: Optional[str]) -> Optional[str]:
    """Normalization used for user name and email lookups."""
    return value.strip().upper() if value else value


@dataclass
class UserAccount:
    user_name: str
    email: str
    normalized_user_name: Optional[str] = None
    normalized_email: Optional[str] = None
    email_confirmed: bool = False
    password_hash: Optional[str] = None
    security_stamp: Optional[str] = None
    two_factor_enabled: bool = False
    id: str = ""

    def __post_init__(self) -> None:
        if not self.normalized_user_name:
            self.normalized_user_name = normalize(self.user_name)
        if not self.normalized_email:
            self.normalized_email = normalize(self.email)
